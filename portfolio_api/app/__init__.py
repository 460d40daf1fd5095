"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: ``core`` (settings, logging, MongoDB handle, security),
``schemas`` (request and response models), ``services`` (credential
logic and the generic resource engine) and ``api`` (versioned
routers).
"""

from .main import app  # noqa: F401
