"""slncmake - convert Visual C++ solutions into CMake build descriptors."""

__version__ = "0.1.0"
