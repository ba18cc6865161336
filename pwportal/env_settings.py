from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field


class EnvSettings(BaseSettings):
    app_name: str = "Password Portal"

    # LDAP
    ldap_host: str = Field("ank.chnet", alias="LDAP_HOST")
    ldap_port: int = Field(636, alias="LDAP_PORT")
    ldap_server_name: str = Field("ank.chnet", alias="LDAP_SERVER_NAME")
    ldap_ca_cert_file: str = Field("static/wisvch.crt", alias="LDAP_CA_CERT_FILE")
    ldap_user_dn_template: str = Field("uid={username},ou=People,dc=ank,dc=chnet", alias="LDAP_USER_DN_TEMPLATE")
    ldap_timeout_s: float = Field(10.0, alias="LDAP_TIMEOUT_S")

    # Password policy
    password_min_length: int = Field(8, alias="PASSWORD_MIN_LENGTH")
    password_min_score: int = Field(3, alias="PASSWORD_MIN_SCORE")

    # Have I Been Pwned (k-anonymity range API)
    hibp_enabled: bool = Field(True, alias="HIBP_ENABLED")
    hibp_api_url: str = Field("https://api.pwnedpasswords.com", alias="HIBP_API_URL")
    hibp_timeout_s: float = Field(5.0, alias="HIBP_TIMEOUT_S")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_dir: str = Field("data/logs", alias="LOG_DIR")
    log_retention_days: int = Field(30, alias="LOG_RETENTION_DAYS")

    class Config:
        populate_by_name = True


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()
