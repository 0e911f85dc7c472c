"""godll - build Go packages into Windows DLLs with matching .def and .lib files."""

__version__ = "0.1.0"
