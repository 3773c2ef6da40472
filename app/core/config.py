from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    BUSINESS_NAME: str = "Empire Performance Coaching"
    BUSINESS_TIMEZONE: str = "Europe/London"

    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None

    STRIPE_SECRET_KEY: str | None = None
    PAYMENT_CURRENCY: str = "gbp"

    DRAFT_STORE_DIR: str = "./data/drafts"
    CONFIRMATION_REDIRECT_SECONDS: float = 3.0
    MONTH_NAV_DEBOUNCE_MS: int = 200
    DASHBOARD_PATH: str = "/parent-dashboard"
    MARKETING_SITE_PATH: str = "/public-landing-page"

    @property
    def backend_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)


settings = Settings()
