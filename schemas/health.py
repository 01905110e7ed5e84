from pydantic import BaseModel

class EnvStatus(BaseModel):
    hasPostgres: bool
    hasBlob: bool

class PingResponse(BaseModel):
    status: str = "ok"
    message: str = "API is working"
    env: EnvStatus
