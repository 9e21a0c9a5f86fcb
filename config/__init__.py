"""Viewer configuration and colormap registry"""
