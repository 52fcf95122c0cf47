"""Readers and writers for external phrase files."""

# Submodules expose the concrete loader functions. Import them directly, e.g.
# ``from neuroenglish.io.phrases import read_import_source``.
