from summarizer.config.settings import Settings
from summarizer.pdf.base import BasePdfExtractor
from summarizer.pdf.pdfplumber_adapter import PdfPlumberAdapter
from summarizer.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Maps the configured ``pdf_engine`` name to a text extractor."""

    ENGINES: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        return cls.for_engine(settings.pdf_engine)

    @classmethod
    def for_engine(cls, engine: str) -> BasePdfExtractor:
        key = engine.strip().lower()
        try:
            return cls.ENGINES[key]()
        except KeyError:
            raise ValueError(
                f"Unknown PDF engine '{key}'. Choose from: {sorted(cls.ENGINES)}"
            ) from None
