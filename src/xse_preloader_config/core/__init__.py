"""Core preloader configuration logic.

This module contains the data model, the XML codec and the editing document.

Submodules:
    model: PreloaderConfig and ProcessRule data classes, LoadMethod names
    codec: decode()/encode() between PreloaderConfig and the xSE XML schema
    document: PreloaderDocument, the validated editing session bound by the GUI

The codec is pure and never touches the file system; reading and writing
files is done by PreloaderDocument.
"""

from .codec import decode, encode
from .document import PreloaderDocument
from .model import LoadMethod, PreloaderConfig, ProcessRule

__all__ = [
    "decode",
    "encode",
    "PreloaderDocument",
    "LoadMethod",
    "PreloaderConfig",
    "ProcessRule",
]
