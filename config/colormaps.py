"""Project colormaps for pressure map rendering"""

from matplotlib.colors import LinearSegmentedColormap


def create_all_colormaps():
    """Create the ramps matplotlib does not ship"""
    colormaps = {}

    # Parula - blue to teal to yellow, smooth luminance climb
    parula_colors = ['#352a87', '#0f5cdd', '#1481d6', '#06a4ca', '#2eb7a4',
                     '#87bf77', '#d1bb59', '#fec832', '#f9fb0e']
    colormaps['Parula'] = LinearSegmentedColormap.from_list('Parula', parula_colors, N=256)

    # MSLP - deep blue (lows) through pale neutral to dark red (highs)
    mslp_colors = ['#08306b', '#2171b5', '#6baed6', '#c6dbef', '#f7f7f7',
                   '#fddbc7', '#f4a582', '#d6604d', '#b2182b', '#67001f']
    colormaps['MSLP'] = LinearSegmentedColormap.from_list('MSLP', mslp_colors, N=256)

    return colormaps
