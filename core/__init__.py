"""Raster / overlay compositing for geo-referenced scalar grids"""
