from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Activation Service Configuration
    ACTIVATION_API_URL: str = "https://activation.sls.microsoft.com/BatchActivation/BatchActivation.asmx"
    ACTIVATION_API_TIMEOUT: int = 30
    ACTIVATION_SOAP_ACTION: str = "http://www.microsoft.com/BatchActivationService/BatchActivate"
    ACTIVATION_USER_AGENT: str = "Microsoft Activation Client"

    # TLS
    ACTIVATION_VERIFY_TLS: bool = True  # Disabling is an explicit, logged opt-in
    ACTIVATION_CA_BUNDLE: str = ""  # Optional path used to pin the remote chain

    # Fallback
    FALLBACK_ENABLED: bool = True

    # Database (in-memory; records do not survive a restart)
    DATABASE_URL: str = "sqlite://"

    # Service Info
    APP_NAME: str = "Confirmation ID Service"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
