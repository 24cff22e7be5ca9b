"""Exception hierarchy for document rendering and form access."""


class ClinicDocsError(Exception):
    """Base class for all clinicdocs errors."""
    pass


class LayoutError(ClinicDocsError):
    """Raised when a document cannot be rendered at all."""
    pass


class FormatError(ClinicDocsError):
    """Raised when an input buffer is not a readable PDF."""
    pass


class ProbeFieldError(ClinicDocsError):
    """Raised when a widget does not support a kind-specific read."""
    pass


class FillFieldError(ClinicDocsError):
    """Raised when a value cannot be written to a widget."""
    pass


class PrintError(ClinicDocsError):
    """Raised when every print strategy failed."""
    pass


class ProfileError(ClinicDocsError):
    """Raised when a layout profile file is malformed."""
    pass
