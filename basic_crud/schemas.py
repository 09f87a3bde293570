from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


# --- Category ---

class CategoryResponse(BaseModel):
    id: int
    name: str
    model_config = ConfigDict(from_attributes=True)


# --- User ---

class UserCreate(BaseModel):
    name: str = Field(max_length=150)
    email: str = Field(max_length=255)
    model_config = ConfigDict(strict=True)


class UserUpdate(BaseModel):
    name: str | None = Field(None, max_length=150)
    email: str | None = Field(None, max_length=255)
    model_config = ConfigDict(strict=True)

    @field_validator("name", "email")
    @classmethod
    def reject_null(cls, value, info: ValidationInfo):
        # Omitted fields never reach validators; only an explicit null does.
        if value is None:
            raise ValueError(f"{info.field_name} may not be null")
        return value


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    model_config = ConfigDict(from_attributes=True)


# --- Post ---

class PostCreate(BaseModel):
    title: str = Field(max_length=300)
    content: str | None = None
    user_id: int = Field(alias="userId")
    categories: list[int] | None = None  # category ids to connect
    model_config = ConfigDict(strict=True, populate_by_name=True)


class PostUpdate(BaseModel):
    """Owner (userId) is fixed at creation and not part of the patch."""

    title: str | None = Field(None, max_length=300)
    content: str | None = None
    categories: list[int] | None = None  # replaces the whole set when given
    model_config = ConfigDict(strict=True)

    @field_validator("title")
    @classmethod
    def reject_null_title(cls, value):
        if value is None:
            raise ValueError("title may not be null")
        return value
