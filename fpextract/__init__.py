"""Fingerprint image processing: segmentation, equalization, orientation, binarization, thinning and minutiae detection."""

__version__ = "0.1.0"