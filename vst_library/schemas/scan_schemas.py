"""Boundary validation for scanner payloads."""
import json
from typing import Any, List, Mapping

from marshmallow import Schema, fields, post_load, EXCLUDE, ValidationError

from vst_library.errors import MalformedPayloadError
from vst_library.models.scan_entry import ScanEntry
from vst_library.schemas.fields import ScalarString, StringOrList
from vst_library.utils.plugin_fields import (
    derive_name,
    derive_plugin_id,
    normalize_paths,
    normalize_sub_categories,
)


class ScanEntrySchema(Schema):
    """
    One plugin descriptor from a scan payload.

    Every scanner field is optional. Unknown keys such as
    ``sourceDirectory`` are ignored. The loaded value is a ``ScanEntry``
    with its id and name already derived.
    """

    class Meta:
        unknown = EXCLUDE

    id = ScalarString(allow_none=True)
    name = ScalarString(allow_none=True)
    vendor = ScalarString(allow_none=True)
    version = ScalarString(allow_none=True)
    category = ScalarString(allow_none=True)
    subCategories = StringOrList(allow_none=True)
    sdkVersion = ScalarString(allow_none=True)
    path = StringOrList(allow_none=True)
    cid = ScalarString(allow_none=True)
    cardinality = fields.Integer(allow_none=True)
    flags = fields.Integer(allow_none=True)
    isValid = fields.Boolean(allow_none=True)
    error = ScalarString(allow_none=True)
    key = ScalarString(allow_none=True)

    @post_load
    def make_entry(self, data, **kwargs) -> ScanEntry:
        paths = normalize_paths(data.get("path"))
        plugin_id = derive_plugin_id(data.get("id"), data.get("cid"), paths)
        if plugin_id is None:
            raise ValidationError("Plugin entry has no id, cid or path")

        is_valid = data.get("isValid")
        return ScanEntry(
            id=plugin_id,
            name=derive_name(data.get("name"), paths),
            paths=paths,
            vendor=data.get("vendor"),
            version=data.get("version"),
            category=data.get("category"),
            sub_categories=normalize_sub_categories(data.get("subCategories")),
            sdk_version=data.get("sdkVersion"),
            cid=data.get("cid"),
            cardinality=data.get("cardinality"),
            flags=data.get("flags"),
            is_valid=True if is_valid is None else is_valid,
            error=data.get("error"),
            key=data.get("key"),
        )


scan_entry_schema = ScanEntrySchema()


def extract_plugin_list(document: Any) -> List[Any]:
    """
    Return the raw plugin list from either accepted payload shape.

    Accepts a bare list or a mapping with a ``plugins`` list.

    Raises:
        MalformedPayloadError: For any other shape.
    """
    if isinstance(document, list):
        return document
    if isinstance(document, Mapping) and isinstance(document.get("plugins"), list):
        return document["plugins"]
    raise MalformedPayloadError(
        "JSON must contain a plugins array or an object with a 'plugins' property"
    )


def parse_scan_payload(document: Any) -> List[ScanEntry]:
    """
    Validate a decoded scan payload into ``ScanEntry`` values.

    Raises:
        MalformedPayloadError: Wrong shape or an invalid entry.
    """
    raw_entries = extract_plugin_list(document)
    try:
        return scan_entry_schema.load(raw_entries, many=True)
    except ValidationError as err:
        raise MalformedPayloadError(f"Invalid plugin entries: {err.messages}") from err


def load_json_document(text: str) -> Any:
    """
    Decode JSON text.

    Raises:
        MalformedPayloadError: If ``text`` is not valid JSON.
    """
    try:
        return json.loads(text)
    except ValueError as err:
        raise MalformedPayloadError(f"Invalid JSON format: {err}") from err
