from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional


class ShippingAddress(BaseModel):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    country: str = Field(min_length=1)

    @field_validator("street", "city", "state", "zip_code", "country")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class CreateOrderRequest(BaseModel):
    shipping_address: ShippingAddress
    payment_method: str = Field(min_length=1)
    customer_email: EmailStr
    customer_phone: str = Field(min_length=10)
    notes: Optional[str] = None


class ReorderRequest(BaseModel):
    shipping_address: ShippingAddress
    payment_method: str = Field(min_length=1)
    notes: Optional[str] = None
