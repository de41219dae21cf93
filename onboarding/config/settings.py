from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    session_store: str = "memory"
    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "onboarding"
    db_username: str = "onboarding"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_connect_timeout_seconds: int = 5

    llm_provider: str = "openai"
    llm_api_key: str = ""
    llm_model_name: str = "gpt-4o-mini"
    llm_base_url: str = ""
    llm_timeout_seconds: int = 30
    llm_temperature: float = 0.3

    ocr_engine: str = "simulated"
    max_upload_bytes: int = 5 * 1024 * 1024
    allowed_mime_types: list[str] = [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "application/pdf",
        "text/plain",
    ]
    auto_fill_min_confidence: float = 0.5

    enrichment_provider: str = "http"
    enrichment_timeout_seconds: int = 10
    postal_code_registry_url: str = "https://api.postalpincode.in/pincode"
    routing_code_registry_url: str = "https://ifsc.razorpay.com"
    tax_id_registry_url: str = ""
    tax_registration_registry_url: str = ""

    verification_provider: str = "example"
    verification_timeout_seconds: int = 10
    tax_id_verification_url: str = ""
    tax_registration_verification_url: str = ""
    bank_account_verification_url: str = ""
    kyc_verification_url: str = ""
    negative_list_verification_url: str = ""
    negative_listed_names: list[str] = []

    risk_step_time_threshold_seconds: int = 120
    risk_step_time_weight: float = 0.3
    risk_session_time_threshold_seconds: int = 900
    risk_low_completion_ratio: float = 0.3
    risk_slow_progress_weight: float = 0.2
    risk_validation_failure_threshold: int = 3
    risk_validation_failure_weight: float = 0.2
    risk_help_request_threshold: int = 2
    risk_help_request_weight: float = 0.1
    risk_tab_hidden_allowance: int = 2
    risk_tab_hidden_weight: float = 0.1
    risk_tab_hidden_cap: float = 0.2
    risk_field_revisit_threshold: int = 5
    risk_field_revisit_weight: float = 0.1
