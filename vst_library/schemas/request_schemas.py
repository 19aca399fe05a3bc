"""Request body schemas for the plugin, settings and library routes."""
from marshmallow import Schema, fields, validate, RAISE, EXCLUDE

from vst_library.schemas.fields import ScalarString, StringOrList


class PluginUpdateSchema(Schema):
    """Partial update of a plugin; only listed fields may be changed."""

    class Meta:
        unknown = RAISE

    name = fields.String(validate=validate.Length(min=1))
    vendor = fields.String(allow_none=True)
    version = ScalarString(allow_none=True)
    category = fields.String(allow_none=True)
    subCategories = StringOrList(allow_none=True)
    sdkVersion = ScalarString(allow_none=True)
    path = StringOrList(allow_none=True)
    cid = fields.String(allow_none=True)
    cardinality = fields.Integer(allow_none=True)
    flags = fields.Integer(allow_none=True)
    isValid = fields.Boolean()
    error = fields.String(allow_none=True)
    key = fields.String(allow_none=True)


class PluginKeySchema(Schema):
    """Body of ``POST /plugins/<id>/key``."""

    class Meta:
        unknown = EXCLUDE

    key = fields.String(required=True, allow_none=False)


class SettingUpdateSchema(Schema):
    """Body of ``PUT /settings/<key>``."""

    class Meta:
        unknown = EXCLUDE

    value = fields.String(required=True, validate=validate.Length(min=1))
    description = fields.String(allow_none=True)


class ValidatePathsSchema(Schema):
    """Body of ``POST /settings/validate-paths``."""

    class Meta:
        unknown = EXCLUDE

    paths = fields.List(fields.String(), required=True)


class ScanRequestSchema(Schema):
    """Optional body of ``POST /vst/scan``."""

    class Meta:
        unknown = EXCLUDE

    directories = fields.List(fields.String(validate=validate.Length(min=1)), allow_none=True)


class ImportFileSchema(Schema):
    """JSON form of ``POST /vst/import``: the file name and its text."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1))
    content = fields.String(required=True)
