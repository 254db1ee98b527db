from pydantic import BaseModel, ConfigDict, Field


# Fields are optional so that missing values reach the services, which answer
# with the API's own 400 messages instead of FastAPI's 422.
class RegisterInput(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginInput(BaseModel):
    email: str | None = None
    password: str | None = None


class ChatInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    system_role: str | None = Field(default=None, alias="systemRole")


class ChatResponse(BaseModel):
    response: str
