from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    interceptor: str


class ErrorResponse(BaseModel):
    code: str
    message: str
    request_id: str
