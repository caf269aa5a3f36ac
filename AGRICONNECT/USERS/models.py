from pydantic import EmailStr, constr, field_validator
from typing import Any, Optional

from AGRICONNECT.utils.sanitize import SanitizedModel


# ---------------------------
# SIGNUP MODELS
# ---------------------------
class Signup(SanitizedModel):
    firstName: constr(min_length=1)
    lastName: constr(min_length=1)
    email: EmailStr
    password: constr(min_length=1)
    role: constr(min_length=1)
    address: Optional[Any] = None
    contactNumber: Optional[str] = None
    birthday: Optional[str] = None
    validIdBase64: Optional[str] = None
    agreedToTerms: Optional[bool] = None

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower().strip() if isinstance(v, str) else v

    @property
    def display_name(self) -> str:
        return f"{self.firstName} {self.lastName}"

    @property
    def safe_email(self) -> str:
        return self.email.replace("@", "_").replace(".", "_")

    def profile(self) -> dict:
        """User document fields shared by every role (no identity yet)."""
        return {
            "firstName": self.firstName,
            "lastName": self.lastName,
            "email": self.email,
            "role": self.role,
            "status": "pending",
            "address": self.address,
            "contactNumber": self.contactNumber,
            "birthday": self.birthday,
            "agreedToTerms": self.agreedToTerms,
        }


class RiderSignup(Signup):
    vehicle: Optional[Any] = None

    def profile(self) -> dict:
        data = super().profile()
        data["vehicle"] = self.vehicle
        return data
