"""
Bundled reference data: Kenyan counties, agro-ecological zones and tree species.

County centroids and bounding boxes are approximate; they are good enough to
place a coordinate in a county for scoring purposes, not for cadastral work.
"""

AGRO_ECOLOGICAL_ZONES = [
    "LH1", "LH2", "LH3", "LH4",  # Lower Highland
    "UM1", "UM2", "UM3", "UM4",  # Upper Midland
    "LM1", "LM2", "LM3", "LM4", "LM5",  # Lower Midland
    "IL1", "IL2", "IL3", "IL4", "IL5", "IL6",  # Inland Lowland
    "CL1", "CL2", "CL3", "CL4", "CL5",  # Coastal Lowland
    "UH1", "UH2", "UH3", "UH4", "UH5", "UH6",  # Upper Highland
]

# county: (centroid latitude, centroid longitude, representative agro-zone)
COUNTIES = {
    "Baringo": (0.85, 35.97, "LM4"),
    "Bomet": (-0.78, 35.34, "LH2"),
    "Bungoma": (0.56, 34.56, "UM2"),
    "Busia": (0.43, 34.24, "LM1"),
    "Elgeyo-Marakwet": (0.80, 35.51, "LH2"),
    "Embu": (-0.53, 37.45, "UM2"),
    "Garissa": (-0.45, 39.65, "IL6"),
    "Homa Bay": (-0.53, 34.46, "LM2"),
    "Isiolo": (0.35, 37.58, "IL5"),
    "Kajiado": (-2.10, 36.78, "IL4"),
    "Kakamega": (0.28, 34.75, "UM1"),
    "Kericho": (-0.37, 35.28, "LH1"),
    "Kiambu": (-1.03, 36.87, "UM1"),
    "Kilifi": (-3.51, 39.91, "CL3"),
    "Kirinyaga": (-0.50, 37.28, "UM2"),
    "Kisii": (-0.68, 34.77, "UM1"),
    "Kisumu": (-0.09, 34.77, "LM1"),
    "Kitui": (-1.37, 38.01, "LM4"),
    "Kwale": (-4.17, 39.46, "CL3"),
    "Laikipia": (0.36, 36.78, "LH4"),
    "Lamu": (-2.27, 40.90, "CL4"),
    "Machakos": (-1.52, 37.26, "LM4"),
    "Makueni": (-1.80, 37.62, "LM4"),
    "Mandera": (3.94, 41.86, "IL6"),
    "Marsabit": (2.33, 37.99, "IL6"),
    "Meru": (0.05, 37.65, "UM2"),
    "Migori": (-1.06, 34.47, "LM1"),
    "Mombasa": (-4.04, 39.67, "CL2"),
    "Murang'a": (-0.72, 37.15, "UM1"),
    "Nairobi": (-1.29, 36.82, "UM4"),
    "Nakuru": (-0.30, 36.07, "LH3"),
    "Nandi": (0.18, 35.13, "LH1"),
    "Narok": (-1.08, 35.87, "LH4"),
    "Nyamira": (-0.57, 34.93, "LH1"),
    "Nyandarua": (-0.18, 36.52, "UH2"),
    "Nyeri": (-0.42, 36.95, "UH1"),
    "Samburu": (1.22, 36.95, "IL5"),
    "Siaya": (0.06, 34.29, "LM1"),
    "Taita-Taveta": (-3.40, 38.56, "LM4"),
    "Tana River": (-1.65, 39.65, "CL5"),
    "Tharaka-Nithi": (-0.30, 37.87, "LM3"),
    "Trans-Nzoia": (1.06, 34.95, "LH2"),
    "Turkana": (3.12, 35.60, "IL6"),
    "Uasin Gishu": (0.55, 35.30, "LH3"),
    "Vihiga": (0.08, 34.72, "UM1"),
    "Wajir": (1.75, 40.06, "IL6"),
    "West Pokot": (1.62, 35.39, "LM5"),
}

# Simplified county bounding boxes: (min lat, max lat, min lng, max lng).
# Order matters where boxes overlap; the first hit wins.
COUNTY_BOUNDS = [
    ("Nairobi", (-1.35, -1.20, 36.70, 36.92)),
    ("Kiambu", (-1.17, -0.90, 36.70, 37.15)),
    ("Nakuru", (-1.08, 0.40, 35.70, 36.40)),
    ("Mombasa", (-4.08, -3.95, 39.58, 39.75)),
    ("Kisumu", (-0.18, 0.05, 34.60, 34.90)),
    ("Machakos", (-1.55, -0.90, 36.90, 37.50)),
    ("Kajiado", (-2.90, -1.00, 36.00, 37.50)),
    ("Nyeri", (-0.65, -0.20, 36.80, 37.15)),
    ("Murang'a", (-0.95, -0.55, 36.80, 37.25)),
    ("Meru", (-0.40, 0.20, 37.40, 38.00)),
]

# Rough national extent used to reject coordinates far outside the catalog's country.
COUNTRY_BOUNDS = (-4.90, 5.10, 33.90, 41.95)

SPECIES = [
    {
        "id": "mango",
        "names": {"english": "Mango", "swahili": "Muembe", "scientific": "Mangifera indica"},
        "suitable_regions": ["Mombasa", "Kilifi", "Kwale", "Taita-Taveta", "Makueni", "Machakos"],
        "suitable_zones": ["CL1", "CL2", "LM1", "LM2"],
        "preferred_soils": ["loamy", "sandy"],
        "suitable_climates": ["tropical", "subtropical"],
        "uses": ["fruit", "shade"],
        "price": 200,
        "growth_rate": "moderate",
        "min_land_size_ha": 0.1,
        "description": "Popular fruit tree suitable for coastal and lower midland areas",
    },
    {
        "id": "grevillea",
        "names": {"english": "Grevillea", "swahili": "Grevelia", "scientific": "Grevillea robusta"},
        "suitable_regions": ["Nyeri", "Kiambu", "Murang'a", "Embu", "Meru", "Nakuru"],
        "suitable_zones": ["UH1", "UH2", "UM1", "UM2", "LH1", "LH2"],
        "preferred_soils": ["loamy", "clay"],
        "suitable_climates": ["tropical", "temperate"],
        "uses": ["timber", "shade", "conservation"],
        "price": 150,
        "growth_rate": "fast",
        "min_land_size_ha": 0.05,
        "description": "Fast-growing timber tree ideal for highlands and tea/coffee farms",
    },
    {
        "id": "acacia",
        "names": {"english": "Acacia", "swahili": "Mgunga", "scientific": "Acacia tortilis"},
        "suitable_regions": ["Kajiado", "Taita-Taveta", "Makueni", "Kitui", "Baringo"],
        "suitable_zones": ["IL1", "IL2", "IL3", "LM3", "LM4"],
        "preferred_soils": ["sandy", "chalky"],
        "suitable_climates": ["arid", "tropical"],
        "uses": ["fodder", "conservation", "timber"],
        "price": 100,
        "growth_rate": "slow",
        "min_land_size_ha": 0.2,
        "description": "Drought-resistant tree excellent for arid and semi-arid areas",
    },
    {
        "id": "bamboo",
        "names": {"english": "Bamboo", "swahili": "Mianzi", "scientific": "Bambusa vulgaris"},
        "suitable_regions": ["Kisii", "Nyamira", "Kakamega", "Vihiga", "Bungoma"],
        "suitable_zones": ["UH1", "UH2", "LH1", "LH2", "UM1"],
        "preferred_soils": ["loamy", "silty", "clay"],
        "suitable_climates": ["tropical", "subtropical"],
        "uses": ["timber", "conservation"],
        "price": 120,
        "growth_rate": "fast",
        "min_land_size_ha": 0.1,
        "description": "Fast-growing multipurpose plant for construction and erosion control",
    },
    {
        "id": "avocado",
        "names": {"english": "Avocado", "swahili": "Parachichi", "scientific": "Persea americana"},
        "suitable_regions": ["Murang'a", "Kiambu", "Nyeri", "Meru", "Embu", "Kakamega"],
        "suitable_zones": ["LH1", "LH2", "UM1", "UM2"],
        "preferred_soils": ["loamy"],
        "suitable_climates": ["tropical", "subtropical"],
        "uses": ["fruit"],
        "price": 300,
        "growth_rate": "moderate",
        "min_land_size_ha": 0.1,
        "description": "High-value fruit tree for export and local markets",
    },
    {
        "id": "moringa",
        "names": {"english": "Moringa", "swahili": "Moringa", "scientific": "Moringa oleifera"},
        "suitable_regions": ["Machakos", "Makueni", "Kitui", "Mombasa", "Kilifi"],
        "suitable_zones": ["IL1", "IL2", "LM2", "LM3", "CL1"],
        "preferred_soils": ["sandy", "loamy"],
        "suitable_climates": ["tropical", "arid"],
        "uses": ["medicine", "fodder"],
        "price": 80,
        "growth_rate": "fast",
        "min_land_size_ha": 0.01,
        "description": "Nutritious multipurpose tree with medicinal properties",
    },
    {
        "id": "croton",
        "names": {"english": "Croton", "swahili": "Mukinduri", "scientific": "Croton megalocarpus"},
        "suitable_regions": ["Kiambu", "Nyeri", "Embu", "Meru", "Nakuru", "Nyandarua"],
        "suitable_zones": ["UH1", "UH2", "UM1", "LH1", "LH2"],
        "preferred_soils": ["loamy", "clay"],
        "suitable_climates": ["tropical", "temperate"],
        "uses": ["timber", "conservation", "shade"],
        "price": 130,
        "growth_rate": "moderate",
        "min_land_size_ha": 0.1,
        "description": "Indigenous tree excellent for fuel wood and soil improvement",
    },
    {
        "id": "cypress",
        "names": {"english": "Cypress", "swahili": "Msaipresi", "scientific": "Cupressus lusitanica"},
        "suitable_regions": ["Nyandarua", "Nyeri", "Kiambu", "Nakuru", "Kericho", "Bomet"],
        "suitable_zones": ["UH1", "UH2", "UH3", "LH1"],
        "preferred_soils": ["loamy", "peaty"],
        "suitable_climates": ["temperate", "cold"],
        "uses": ["timber", "conservation"],
        "price": 140,
        "growth_rate": "moderate",
        "min_land_size_ha": 0.2,
        "description": "Popular timber tree for highland areas and water catchments",
    },
    {
        "id": "macadamia",
        "names": {"english": "Macadamia", "swahili": "Makadamia", "scientific": "Macadamia integrifolia"},
        "suitable_regions": ["Embu", "Meru", "Kiambu", "Murang'a", "Kirinyaga", "Nyeri"],
        "suitable_zones": ["LH1", "LH2", "UM1", "UM2"],
        "preferred_soils": ["loamy", "silty"],
        "suitable_climates": ["tropical", "subtropical"],
        "uses": ["fruit"],
        "price": 350,
        "growth_rate": "slow",
        "min_land_size_ha": 0.2,
        "description": "Premium nut tree with high export value",
    },
    {
        "id": "neem",
        "names": {"english": "Neem", "swahili": "Mwarobaini", "scientific": "Azadirachta indica"},
        "suitable_regions": ["Machakos", "Makueni", "Kitui", "Kajiado", "Taita-Taveta"],
        "suitable_zones": ["IL1", "IL2", "LM2", "LM3", "LM4"],
        "preferred_soils": ["sandy", "chalky", "loamy"],
        "suitable_climates": ["arid", "tropical"],
        "uses": ["medicine", "timber", "conservation"],
        "price": 90,
        "growth_rate": "fast",
        "min_land_size_ha": 0.05,
        "description": "Versatile tree with medicinal and pest control properties",
    },
    {
        "id": "casuarina",
        "names": {"english": "Casuarina", "swahili": "Mkenge", "scientific": "Casuarina equisetifolia"},
        "suitable_regions": ["Mombasa", "Kilifi", "Kwale", "Lamu", "Tana River"],
        "suitable_zones": ["CL1", "CL2", "CL3", "CL4"],
        "preferred_soils": ["sandy"],
        "suitable_climates": ["tropical"],
        "uses": ["timber", "conservation"],
        "price": 110,
        "growth_rate": "fast",
        "min_land_size_ha": 0.1,
        "description": "Coastal tree excellent for windbreaks and soil stabilization",
    },
    {
        "id": "papaya",
        "names": {"english": "Papaya", "swahili": "Mpapai", "scientific": "Carica papaya"},
        "suitable_regions": ["Mombasa", "Kilifi", "Kwale", "Makueni", "Machakos", "Taita-Taveta"],
        "suitable_zones": ["CL1", "CL2", "LM1", "LM2", "IL1"],
        "preferred_soils": ["loamy", "sandy"],
        "suitable_climates": ["tropical"],
        "uses": ["fruit", "medicine"],
        "price": 150,
        "growth_rate": "fast",
        "min_land_size_ha": 0.01,
        "description": "Fast-growing fruit tree with nutritious and medicinal fruits",
    },
    {
        "id": "eucalyptus",
        "names": {"english": "Eucalyptus", "swahili": "Mukalitusi", "scientific": "Eucalyptus grandis"},
        "suitable_regions": ["Nakuru", "Uasin Gishu", "Trans-Nzoia", "Kericho", "Nandi"],
        "suitable_zones": ["UH1", "UH2", "LH1", "LH2", "UM1"],
        "preferred_soils": ["loamy", "clay", "sandy"],
        "suitable_climates": ["tropical", "temperate"],
        "uses": ["timber", "conservation"],
        "price": 100,
        "growth_rate": "fast",
        "min_land_size_ha": 0.5,
        "description": "Fast-growing timber tree suitable for commercial plantations",
    },
    {
        "id": "orange",
        "names": {"english": "Orange", "swahili": "Mchungwa", "scientific": "Citrus sinensis"},
        "suitable_regions": ["Machakos", "Makueni", "Mombasa", "Kilifi", "Kwale"],
        "suitable_zones": ["LM1", "LM2", "CL1", "CL2", "IL1"],
        "preferred_soils": ["loamy", "sandy"],
        "suitable_climates": ["tropical", "subtropical", "mediterranean"],
        "uses": ["fruit"],
        "price": 220,
        "growth_rate": "moderate",
        "min_land_size_ha": 0.1,
        "description": "Citrus fruit tree for fresh fruit and juice production",
    },
    {
        "id": "calliandra",
        "names": {"english": "Calliandra", "swahili": "Kaliandra", "scientific": "Calliandra calothyrsus"},
        "suitable_regions": ["Embu", "Meru", "Nyeri", "Kiambu", "Murang'a"],
        "suitable_zones": ["LH1", "LH2", "UM1", "UM2"],
        "preferred_soils": ["loamy", "clay"],
        "suitable_climates": ["tropical"],
        "uses": ["fodder", "conservation"],
        "price": 80,
        "growth_rate": "fast",
        "min_land_size_ha": 0.01,
        "description": "Nitrogen-fixing fodder tree excellent for dairy farming",
    },
    {
        "id": "sesbania",
        "names": {"english": "Sesbania", "swahili": "Msesbania", "scientific": "Sesbania sesban"},
        "suitable_regions": ["Kisumu", "Siaya", "Busia", "Kakamega", "Vihiga"],
        "suitable_zones": ["LM1", "LM2", "UM1", "LH1"],
        "preferred_soils": ["clay", "silty"],
        "suitable_climates": ["tropical"],
        "uses": ["fodder", "conservation"],
        "price": 70,
        "growth_rate": "fast",
        "min_land_size_ha": 0.01,
        "description": "Fast-growing fodder tree that enriches soil fertility",
    },
    {
        "id": "coconut",
        "names": {"english": "Coconut", "swahili": "Mnazi", "scientific": "Cocos nucifera"},
        "suitable_regions": ["Mombasa", "Kilifi", "Kwale", "Lamu", "Tana River"],
        "suitable_zones": ["CL1", "CL2", "CL3"],
        "preferred_soils": ["sandy"],
        "suitable_climates": ["tropical"],
        "uses": ["fruit", "timber"],
        "price": 250,
        "growth_rate": "slow",
        "min_land_size_ha": 0.1,
        "description": "Iconic coastal tree producing nuts, oil, and building materials",
    },
    {
        "id": "guava",
        "names": {"english": "Guava", "swahili": "Mpera", "scientific": "Psidium guajava"},
        "suitable_regions": ["Machakos", "Makueni", "Embu", "Meru", "Kisii"],
        "suitable_zones": ["LM1", "LM2", "LM3", "UM1"],
        "preferred_soils": ["loamy", "clay", "sandy"],
        "suitable_climates": ["tropical", "subtropical"],
        "uses": ["fruit", "medicine"],
        "price": 180,
        "growth_rate": "moderate",
        "min_land_size_ha": 0.05,
        "description": "Hardy fruit tree with nutritious vitamin-rich fruits",
    },
    {
        "id": "leucaena",
        "names": {"english": "Leucaena", "swahili": "Msindizi", "scientific": "Leucaena leucocephala"},
        "suitable_regions": ["Machakos", "Makueni", "Kitui", "Taita-Taveta"],
        "suitable_zones": ["LM2", "LM3", "IL1", "IL2"],
        "preferred_soils": ["loamy", "chalky"],
        "suitable_climates": ["tropical", "arid"],
        "uses": ["fodder", "conservation", "timber"],
        "price": 75,
        "growth_rate": "fast",
        "min_land_size_ha": 0.05,
        "description": "Multi-purpose legume tree for fodder and soil improvement",
    },
    {
        "id": "jacaranda",
        "names": {"english": "Jacaranda", "swahili": "Mjakaranda", "scientific": "Jacaranda mimosifolia"},
        "suitable_regions": ["Nairobi", "Kiambu", "Nakuru", "Nyeri", "Uasin Gishu"],
        "suitable_zones": ["UH1", "UM1", "LH1", "LH2"],
        "preferred_soils": ["loamy", "sandy"],
        "suitable_climates": ["tropical", "subtropical"],
        "uses": ["shade", "timber"],
        "price": 160,
        "growth_rate": "fast",
        "min_land_size_ha": 0.05,
        "description": "Ornamental tree with purple flowers for urban areas",
    },
]
