"""Input readers and scene assembly for the sea-level pressure viewer"""
