"""Base schema configuration for all Pydantic models.

Two families of models exist in this service:
- Upstream models (``DownstreamResponse``) parse what Judge.me and Shopify send
  and silently ignore every field they do not declare.
- Public models (``APIResponse``) are what the storefront receives; they forbid
  undeclared fields so raw upstream data can never leak through them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Accept both snake_case and camelCase
        use_enum_values=True,
        validate_default=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request bodies (unknown keys ignored)."""

    model_config = ConfigDict(
        extra="ignore",
    )


class APIResponse(_BaseSchema):
    """Base class for outgoing API responses (unknown keys rejected)."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )


class DownstreamResponse(_BaseSchema):
    """Base class for records received from upstream services.

    Upstream services add properties over time; those are dropped at parse time
    rather than breaking validation.
    """

    model_config = ConfigDict(
        extra="ignore",
    )
