from barista_client.schemas.api.base import BaseSchema, Record, Version
from barista_client.schemas.api.references.currency import Currency

__all__ = ["BaseSchema", "Currency", "Record", "Version"]
