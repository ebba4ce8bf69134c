"""Decoders and encoders for raw RF pulse trains from home sensors, doorbells and smoke detectors."""

__version__ = "0.1.0"