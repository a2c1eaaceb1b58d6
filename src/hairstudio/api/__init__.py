"""Hair Studio: FastAPI REST API layer.

This package contains the FastAPI application, Pydantic request/response
models, and multipart upload handling.

Modules
-------
main
    FastAPI application factory, route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response bodies.
uploads
    Reading multipart image uploads into memory.
"""
