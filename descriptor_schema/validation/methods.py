"""
Validators for HTTP method names.

Each validator accepts exactly one method string, e.g. GET("GET") succeeds and
GET("POST") fails.
"""

from typing import Dict

from descriptor_schema.descriptors.types import LiteralDescriptor
from descriptor_schema.validation.adapter import DataValidator, from_decoder

METHOD_DELETE = "DELETE"
METHOD_GET = "GET"
METHOD_HEAD = "HEAD"
METHOD_OPTIONS = "OPTIONS"
METHOD_PATCH = "PATCH"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_TRACE = "TRACE"

DELETE = from_decoder(LiteralDescriptor(value=METHOD_DELETE))
GET = from_decoder(LiteralDescriptor(value=METHOD_GET))
HEAD = from_decoder(LiteralDescriptor(value=METHOD_HEAD))
OPTIONS = from_decoder(LiteralDescriptor(value=METHOD_OPTIONS))
PATCH = from_decoder(LiteralDescriptor(value=METHOD_PATCH))
POST = from_decoder(LiteralDescriptor(value=METHOD_POST))
PUT = from_decoder(LiteralDescriptor(value=METHOD_PUT))
TRACE = from_decoder(LiteralDescriptor(value=METHOD_TRACE))

METHODS: Dict[str, DataValidator] = {
    METHOD_DELETE: DELETE,
    METHOD_GET: GET,
    METHOD_HEAD: HEAD,
    METHOD_OPTIONS: OPTIONS,
    METHOD_PATCH: PATCH,
    METHOD_POST: POST,
    METHOD_PUT: PUT,
    METHOD_TRACE: TRACE,
}
