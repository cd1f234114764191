from sqlmodel import SQLModel, Field


class CartAddRequest(SQLModel):
    book_id: int
    quantity: int = Field(default=1, ge=1)


class CartUpdateRequest(SQLModel):
    quantity: int = Field(ge=1)
