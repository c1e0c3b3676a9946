"""HT32 mini PC panel library: LCD and LED strip control, framebuffer, and system sensors."""

__version__ = "0.8.0"