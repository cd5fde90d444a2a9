"""
Prompt-driven image enhancement for OCR.

A prompt is turned into an enhancement plan (variants of image
operations), the variants are rendered with OpenCV, and every image is
run through an OCR engine with results written next to the images.
"""

__version__ = "1.0.0"
