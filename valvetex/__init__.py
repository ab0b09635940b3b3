"""VTF header structures, Float16, memory and callback streams, and VMT material node trees."""

__version__ = "0.1.0"