from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Article requests ---

class ArticleCreate(BaseModel):
    name: str

    model_config = ConfigDict(extra="forbid")


class ArticleUpdate(BaseModel):
    name: str | None = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_fields(self) -> "ArticleUpdate":
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("name may not be null")
        return self


# --- Article responses ---

class ArticleResponse(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Envelopes ---
# Payload keys differ per endpoint (Articles / article / response); clients
# already depend on these exact names.

class SuccessEnvelope(BaseModel):
    success: bool


class ArticleListEnvelope(SuccessEnvelope):
    articles: list[ArticleResponse] = Field(alias="Articles")
    model_config = ConfigDict(populate_by_name=True)


class ArticleEnvelope(SuccessEnvelope):
    article: ArticleResponse | None


class ArticleCreatedEnvelope(SuccessEnvelope):
    response: ArticleResponse


class ErrorEnvelope(SuccessEnvelope):
    detail: str
