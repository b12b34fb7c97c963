from abc import ABC, abstractmethod

PAGE_SEPARATOR = "\n\n"


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Pages are emitted in document order, separated by a blank line.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Extracted text as a single string. Empty for image-only documents.

        Raises:
            PdfExtractionError: if the document cannot be opened or parsed.
        """

    @staticmethod
    def join_pages(pages: list[str]) -> str:
        return PAGE_SEPARATOR.join(page.strip() for page in pages).strip()
