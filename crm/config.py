from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./crm.db"
    debug: bool = False
    log_level: str = "INFO"

    sheet_api_url: str = "https://sheetdb.io/api/v1/xwraoa0tt1kgq"
    sheet_timeout_seconds: float = 15.0

    issuer_name: str = "AXIOM AI"
    issuer_company_id: str = "AXIOMAI"
    issuer_address: str = "Bangalore, Karnataka, India"
    issuer_phone: str = "9886709463"

    currency_label: str = "Rs."
    currency_grouping: Literal["indian", "western"] = "indian"
    default_client_address: str = "India"
    default_due_days: int = 30

    payment_terms: str = "Due upon receipt"
    bank_account_name: str = "AXIOM AI"
    bank_name: str = "ICICI Bank"
    bank_account_no: str = "10095001122"
    bank_branch: str = "Banashankari 3rd Stage"
    bank_ifsc: str = "ICIC000109"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="")


settings = Settings()
