from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"

    llm_provider: str = "gemini"

    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-2.5-flash"
    gemini_models: list[str] = ["gemini-2.5-flash"]

    volcano_api_key: str = ""
    volcano_base_url: str = "https://ark.cn-beijing.volces.com/api/v3"
    volcano_model_id: str = "ep-20250718110917-jckmt"
    volcano_timeout_seconds: int | None = 60

    default_prompt: str = "Summarize this document in three key bullet points."
    archive_name: str = "pdf_summaries.zip"
    output_dir: str = "."
