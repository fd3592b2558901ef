import dataclasses
from typing import Optional

from pydantic import BaseModel, Field


@dataclasses.dataclass
class BucketModel:
    Name: str = ""


class QueueModel(BaseModel):
    queue_name: str = Field(alias="QueueName")
    delay_seconds: int = Field(0, alias="DelaySeconds")
    fifo_queue: bool = Field(False, alias="FifoQueue")
    arn: Optional[str] = Field(None, alias="Arn")


class TypeConfigurationModel(BaseModel):
    ApiKey: str
    Endpoint: Optional[str] = None
