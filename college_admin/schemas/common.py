from typing import ClassVar, Tuple

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """
    Body of a PUT that changes only the fields it sends.

    An explicit null is accepted only for columns listed in
    ``nullable_fields``; everything else maps onto a NOT NULL column.
    """
    nullable_fields: ClassVar[Tuple[str, ...]] = ()

    class Config:
        extra = "forbid"
        str_strip_whitespace = True

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in sorted(self.model_fields_set):
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} cannot be null")
        return self
