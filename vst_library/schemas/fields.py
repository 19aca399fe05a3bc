"""Custom marshmallow fields for scanner payloads."""
from marshmallow import fields


class StringOrList(fields.Field):
    """Accepts a string or a list of strings, as scanners report ``path``."""

    default_error_messages = {"invalid": "Must be a string or a list of strings."}

    def _serialize(self, value, attr, obj, **kwargs):
        return value

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            return list(value)
        raise self.make_error("invalid")


class ScalarString(fields.String):
    """String field that also accepts numbers (scanners emit ``"version": 1``)."""

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        return super()._deserialize(value, attr, data, **kwargs)
