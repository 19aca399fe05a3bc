"""Marshmallow schemas for scanner payloads and request bodies."""
from vst_library.schemas.scan_schemas import (
    ScanEntrySchema,
    extract_plugin_list,
    load_json_document,
    parse_scan_payload,
)
from vst_library.schemas.request_schemas import (
    ImportFileSchema,
    PluginKeySchema,
    PluginUpdateSchema,
    ScanRequestSchema,
    SettingUpdateSchema,
    ValidatePathsSchema,
)

__all__ = [
    "ScanEntrySchema",
    "extract_plugin_list",
    "load_json_document",
    "parse_scan_payload",
    "ImportFileSchema",
    "PluginKeySchema",
    "PluginUpdateSchema",
    "ScanRequestSchema",
    "SettingUpdateSchema",
    "ValidatePathsSchema",
]
