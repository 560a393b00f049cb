"""protoc plugin entry point.

Usage::

    protoc --plugin=protoc-gen-protoapi --protoapi_out=. \\
        --protoapi_opt=service_import=@/api/api,output_paths=src/api \\
        proto/user/user.proto

Generated files are written straight into the configured directories, so the
``CodeGeneratorResponse`` carries no files. Fatal errors are reported through
``response.error``, which makes protoc fail the build.
"""

from __future__ import annotations

import logging
import os
import sys

from google.protobuf.compiler import plugin_pb2

from .errors import ProtoapiError
from .generator import generate
from .loader import load_request, read_request
from .logs import LOG_LEVEL_ENV, configure_logging
from .options import parse_options

logger = logging.getLogger(__name__)


def run(request: plugin_pb2.CodeGeneratorRequest) -> plugin_pb2.CodeGeneratorResponse:
    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    try:
        config = parse_options(request.parameter)
        files = load_request(request)
        generate(files, config)
    except ProtoapiError as exc:
        logger.error("%s", exc)
        response.error = str(exc)
    return response


def main() -> int:
    configure_logging(os.environ.get(LOG_LEVEL_ENV, "WARNING"))
    response = plugin_pb2.CodeGeneratorResponse()
    try:
        request = read_request(sys.stdin.buffer.read())
    except ProtoapiError as exc:
        response.error = str(exc)
    else:
        response = run(request)
    sys.stdout.buffer.write(response.SerializeToString())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
