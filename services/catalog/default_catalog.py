"""
Built-in training catalog.

Thirty targets spanning every requirement tier, from forgiving standard
stars to exoplanet transits that need the best seeing, clouds and water
vapor of the week.
"""

DEFAULT_OBSERVATIONS = [
    {
        "id": 1, "name": "M42 - Orion Nebula", "type": "nebula",
        "ra": "05:35:17", "dec": "-05°23'28\"",
        "iq": "IQ85", "cc": "CC70", "wv": "WV80", "duration": 5,
        "description": "Star-forming region in Orion",
    },
    {
        "id": 2, "name": "NGC 1365 - Barred Spiral", "type": "galaxy",
        "ra": "03:33:36", "dec": "-36°08'25\"",
        "iq": "IQ70", "cc": "CC50", "wv": "WV50", "duration": 8,
        "description": "Barred spiral galaxy in Fornax",
    },
    {
        "id": 3, "name": "Proxima Centauri", "type": "star",
        "ra": "14:29:43", "dec": "-62°40'46\"",
        "iq": "IQ20", "cc": "CC50", "wv": "WV20", "duration": 10,
        "description": "Closest star to the Sun",
    },
    {
        "id": 4, "name": "67P/Churyumov–Gerasimenko", "type": "comet",
        "ra": "22:15:44", "dec": "+12°18'32\"",
        "iq": "IQAny", "cc": "CC80", "wv": "WVAny", "duration": 4,
        "description": "Periodic comet, non-sidereal tracking",
        "non_sidereal": True,
    },
    {
        "id": 5, "name": "M31 - Andromeda Galaxy", "type": "galaxy",
        "ra": "00:42:44", "dec": "+41°16'09\"",
        "iq": "IQ85", "cc": "CC70", "wv": "WV80", "duration": 6,
        "description": "Nearest large galaxy",
    },
    {
        "id": 6, "name": "Betelgeuse", "type": "star",
        "ra": "05:55:10", "dec": "+07°24'25\"",
        "iq": "IQAny", "cc": "CCAny", "wv": "WVAny", "duration": 3,
        "description": "Red supergiant in Orion",
    },
    {
        "id": 7, "name": "GJ 1214 b Transit", "type": "exoplanet",
        "ra": "17:15:19", "dec": "+04°57'50\"",
        "iq": "IQ20", "cc": "CC50", "wv": "WV20", "duration": 15,
        "description": "Exoplanet transit observation",
    },
    {
        "id": 8, "name": "NGC 6397 - Globular Cluster", "type": "cluster",
        "ra": "17:40:42", "dec": "-53°40'27\"",
        "iq": "IQ70", "cc": "CC70", "wv": "WV50", "duration": 7,
        "description": "One of the closest globular clusters",
    },
    {
        "id": 9, "name": "Crab Nebula - M1", "type": "nebula",
        "ra": "05:34:32", "dec": "+22°00'52\"",
        "iq": "IQ85", "cc": "CC70", "wv": "WV80", "duration": 5,
        "description": "Supernova remnant in Taurus",
    },
    {
        "id": 10, "name": "2024 PT5 - Near Earth Asteroid", "type": "asteroid",
        "ra": "18:45:12", "dec": "-23°12'45\"",
        "iq": "IQAny", "cc": "CC80", "wv": "WVAny", "duration": 4,
        "description": "Fast-moving NEO, non-sidereal",
        "non_sidereal": True,
    },
    {
        "id": 11, "name": "Vega - Standard Star", "type": "star",
        "ra": "18:36:56", "dec": "+38°47'01\"",
        "iq": "IQAny", "cc": "CC70", "wv": "WV50", "duration": 2,
        "description": "Photometric standard star",
    },
    {
        "id": 12, "name": "NGC 253 - Sculptor Galaxy", "type": "galaxy",
        "ra": "00:47:33", "dec": "-25°17'18\"",
        "iq": "IQ70", "cc": "CC50", "wv": "WV50", "duration": 9,
        "description": "Starburst galaxy in Sculptor",
    },
    {
        "id": 13, "name": "TRAPPIST-1 System", "type": "exoplanet",
        "ra": "23:06:29", "dec": "-05°02'29\"",
        "iq": "IQ20", "cc": "CC50", "wv": "WV20", "duration": 12,
        "description": "Multi-planet system observation",
    },
    {
        "id": 14, "name": "Omega Centauri", "type": "cluster",
        "ra": "13:26:47", "dec": "-47°28'46\"",
        "iq": "IQ85", "cc": "CC70", "wv": "WV80", "duration": 6,
        "description": "Largest globular cluster in MW",
    },
    {
        "id": 15, "name": "C/2023 A3 Tsuchinshan-ATLAS", "type": "comet",
        "ra": "16:22:18", "dec": "-28°45'10\"",
        "iq": "IQAny", "cc": "CC80", "wv": "WVAny", "duration": 5,
        "description": "Bright periodic comet",
        "non_sidereal": True,
    },
    {
        "id": 16, "name": "Eta Carinae", "type": "star",
        "ra": "10:45:04", "dec": "-59°41'04\"",
        "iq": "IQ70", "cc": "CC70", "wv": "WV50", "duration": 8,
        "description": "Massive binary star system",
    },
    {
        "id": 17, "name": "M51 - Whirlpool Galaxy", "type": "galaxy",
        "ra": "13:29:52", "dec": "+47°11'43\"",
        "iq": "IQ70", "cc": "CC50", "wv": "WV50", "duration": 7,
        "description": "Interacting spiral galaxy pair",
    },
    {
        "id": 18, "name": "Ring Nebula - M57", "type": "nebula",
        "ra": "18:53:35", "dec": "+33°01'45\"",
        "iq": "IQ85", "cc": "CC70", "wv": "WV80", "duration": 4,
        "description": "Planetary nebula in Lyra",
    },
    {
        "id": 19, "name": "Sirius A & B", "type": "star",
        "ra": "06:45:09", "dec": "-16°42'58\"",
        "iq": "IQ20", "cc": "CC50", "wv": "WV20", "duration": 6,
        "description": "Binary star with white dwarf",
    },
    {
        "id": 20, "name": "M87 - Virgo A", "type": "galaxy",
        "ra": "12:30:49", "dec": "+12°23'28\"",
        "iq": "IQ70", "cc": "CC50", "wv": "WV50", "duration": 10,
        "description": "Giant elliptical with black hole jet",
    },
    {
        "id": 21, "name": "Pleiades - M45", "type": "cluster",
        "ra": "03:47:00", "dec": "+24°07'00\"",
        "iq": "IQAny", "cc": "CCAny", "wv": "WVAny", "duration": 3,
        "description": "Open cluster - Seven Sisters",
    },
    {
        "id": 22, "name": "Kepler-442b Transit", "type": "exoplanet",
        "ra": "04:53:09", "dec": "+41°38'41\"",
        "iq": "IQ20", "cc": "CC50", "wv": "WV20", "duration": 14,
        "description": "Super-Earth in habitable zone",
    },
    {
        "id": 23, "name": "Helix Nebula - NGC 7293", "type": "nebula",
        "ra": "22:29:39", "dec": "-20°50'14\"",
        "iq": "IQ85", "cc": "CC70", "wv": "WV80", "duration": 6,
        "description": "Closest planetary nebula",
    },
    {
        "id": 24, "name": "Centaurus A - NGC 5128", "type": "galaxy",
        "ra": "13:25:28", "dec": "-43°01'09\"",
        "iq": "IQ70", "cc": "CC50", "wv": "WV50", "duration": 9,
        "description": "Peculiar galaxy with dust lane",
    },
    {
        "id": 25, "name": "47 Tucanae", "type": "cluster",
        "ra": "00:24:05", "dec": "-72°04'53\"",
        "iq": "IQ85", "cc": "CC70", "wv": "WV80", "duration": 5,
        "description": "Dense globular cluster",
    },
    {
        "id": 26, "name": "2 Pallas", "type": "asteroid",
        "ra": "08:12:34", "dec": "+15°23'12\"",
        "iq": "IQAny", "cc": "CC80", "wv": "WVAny", "duration": 3,
        "description": "Third largest asteroid",
        "non_sidereal": True,
    },
    {
        "id": 27, "name": "Polaris - North Star", "type": "star",
        "ra": "02:31:49", "dec": "+89°15'51\"",
        "iq": "IQAny", "cc": "CCAny", "wv": "WVAny", "duration": 2,
        "description": "Cepheid variable star",
    },
    {
        "id": 28, "name": "Sombrero Galaxy - M104", "type": "galaxy",
        "ra": "12:39:59", "dec": "-11°37'23\"",
        "iq": "IQ70", "cc": "CC50", "wv": "WV50", "duration": 8,
        "description": "Edge-on spiral with dust ring",
    },
    {
        "id": 29, "name": "Eagle Nebula - M16", "type": "nebula",
        "ra": "18:18:48", "dec": "-13°47'00\"",
        "iq": "IQ85", "cc": "CC70", "wv": "WV80", "duration": 7,
        "description": "Pillars of Creation location",
    },
    {
        "id": 30, "name": "WASP-121b Transit", "type": "exoplanet",
        "ra": "07:10:24", "dec": "-39°05'51\"",
        "iq": "IQ20", "cc": "CC50", "wv": "WV20", "duration": 11,
        "description": "Hot Jupiter with metal vapors",
    },
]
