from typing import Optional
from pydantic import BaseModel, EmailStr, field_validator, model_validator

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


class ReservaConfig(BaseModel):
    aikotoba: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    cookie: Optional[str] = None
    log_level: str = "INFO"
    timeout_seconds: Optional[int] = None

    @field_validator('log_level')
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level

    @field_validator('timeout_seconds')
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and (v < 5 or v > 300):
            raise ValueError("timeout_seconds must be between 5 and 300")
        return v

    @model_validator(mode='after')
    def validate_user_credentials(self):
        if bool(self.email) != bool(self.password):
            raise ValueError("email and password must be given together")
        return self

    def credential_mode(self) -> Optional[str]:
        """Which login flow the configured credentials select, if any."""
        if self.aikotoba:
            return "aikotoba"
        if self.email and self.password:
            return "user"
        return None
