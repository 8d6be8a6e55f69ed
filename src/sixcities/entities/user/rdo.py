"""Response projection of a user."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserRDO(BaseModel):
    """The user as exposed to external callers.

    Only ``id``, ``name``, ``email``, ``avatarPath`` and ``isPro`` are
    copied from the source; every other attribute is dropped. Missing
    source fields come out as ``None``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
        frozen=True,
    )

    # Values are copied as given, never coerced
    id: Any = None
    name: Any = None
    email: Any = None
    avatar_path: Any = None
    is_pro: Any = None

    @classmethod
    def fill(cls, source: Any, **overrides: Any) -> UserRDO:
        """Project ``source`` (an entity, table row or mapping).

        ``overrides`` replace projected values, e.g. an ``is_pro`` computed
        by the caller. They are keyed by field name or camelCase alias.
        """
        unknown = set(overrides) - _FIELD_BY_KEY.keys()
        if unknown:
            raise TypeError(f"Unknown UserRDO fields: {', '.join(sorted(unknown))}")

        if isinstance(source, Mapping):
            data = dict(source)
        else:
            data = cls.model_validate(source, from_attributes=True).model_dump()
        for key, value in overrides.items():
            field = _FIELD_BY_KEY[key]
            # The alias takes precedence over the field name on validation
            data.pop(to_camel(field), None)
            data[field] = value
        return cls.model_validate(data)

    def to_response(self) -> dict[str, Any]:
        """Serialize with the camelCase keys external callers expect."""
        return self.model_dump(mode="json", by_alias=True)


_FIELD_BY_KEY = {
    **{name: name for name in UserRDO.model_fields},
    **{to_camel(name): name for name in UserRDO.model_fields},
}
