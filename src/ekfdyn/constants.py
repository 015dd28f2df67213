"""
The `constants` module defines the central-body constants used by the
gravity model presets.
"""

# Earth Constants
"""
Earth's equatorial radius. [m]

References:

1. GGM05s Gravity Model
"""
R_EARTH = 6.378136300e6  # [m] GGM05s Value

"""
Earth's Gravitational constant [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_EARTH = 3.986004415e14  # [m^3/s^2] GGM05s Value

"""
Earth's first zonal harmonic. [dimensionless]

References:

1. GGM05s Gravity Model.
"""
J2_EARTH = 0.0010826358191967  # [] GGM05s value

# Moon Constants
"""
Gravitational constant of the Moon. [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_MOON = 4902.800066 * 1e9

"""
Mean radius of the Moon. [m]

References:

1. IAU WG on Cartographic Coordinates and Rotational Elements, 2015.
"""
R_MOON = 1.7374e6

"""
Lunar second-degree zonal harmonic. [dimensionless]

References:

1. GRAIL GL0660B Gravity Model.
"""
J2_MOON = 2.0321568464952e-4

# Mars Constants
"""
Gravitational constant of Mars. [m^3/s^2]

References:

1. JPL DE440 Planetary Ephemerides.
"""
GM_MARS = 4.282837362069909e13

"""
Equatorial radius of Mars. [m]

References:

1. IAU WG on Cartographic Coordinates and Rotational Elements, 2015.
"""
R_MARS = 3.3962e6

"""
Martian second-degree zonal harmonic. [dimensionless]

References:

1. MRO120D Gravity Model.
"""
J2_MARS = 1.96045e-3
