"""Image viewer building blocks: EXIF summaries, Nikon maker notes, text styles, mouse bindings and pointer geometry."""

__version__ = "0.1.0"