"""API description parser -- load a document and extract an ApiDocument.

Typical usage::

    from sdkforge.parser import extract_document, load_spec, validate_spec_version

    raw = load_spec("https://petstore3.swagger.io/api/v3/openapi.json")
    validate_spec_version(raw)
    document = extract_document(raw)

Sub-modules:

* :mod:`~sdkforge.parser.loader` -- I/O layer (URL, file, stdin), format
  detection and version validation.
* :mod:`~sdkforge.parser.extractor` -- walks the raw document and produces
  an :class:`~sdkforge.models.ApiDocument`.
"""

from sdkforge.parser.extractor import extract_document, load_document
from sdkforge.parser.loader import load_spec, validate_spec_version

__all__ = ["extract_document", "load_document", "load_spec", "validate_spec_version"]
