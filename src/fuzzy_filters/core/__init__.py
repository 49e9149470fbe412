"""Pixel values, buffers, kernels and the filter engine."""
