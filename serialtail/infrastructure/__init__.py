"""Infrastructure layer - adapters for the serial port and the file system."""
