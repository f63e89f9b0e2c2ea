class BdfError(Exception):
    """Fatal problem with the input font; the conversion cannot continue."""
