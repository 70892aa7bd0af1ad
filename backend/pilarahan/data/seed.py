"""Seed rows for the reference store (waste types, learning resources, recycling centers)."""

from __future__ import annotations

from typing import Any, Dict, List

SEED_CREATED_AT = "2024-01-01T00:00:00+00:00"

WASTE_TYPES: List[Dict[str, Any]] = [
    {
        "name": "Plastic",
        "description": "Various plastic items including bottles, containers, and packaging.",
        "is_recyclable": True,
        "disposal_instructions": "Clean and place in recycling bin. Check resin identification code (1-7) to verify recyclability.",
        "category": "Recycling",
        "color_class": "primary",
    },
    {
        "name": "Paper",
        "description": "Paper products including cardboard, newspapers, magazines, and office paper.",
        "is_recyclable": True,
        "disposal_instructions": "Remove any plastic or metal components. Flatten cardboard boxes.",
        "category": "Recycling",
        "color_class": "secondary",
    },
    {
        "name": "Glass",
        "description": "Glass bottles and jars of various colors.",
        "is_recyclable": True,
        "disposal_instructions": "Rinse containers and remove lids or caps. Sort by color if required.",
        "category": "Recycling",
        "color_class": "accent",
    },
    {
        "name": "Metal",
        "description": "Metal cans, aluminum foil, and other metal items.",
        "is_recyclable": True,
        "disposal_instructions": "Clean and remove labels if possible. Separate different metal types.",
        "category": "Recycling",
        "color_class": "secondary",
    },
    {
        "name": "Organic",
        "description": "Food scraps, yard waste, and other biodegradable materials.",
        "is_recyclable": True,
        "disposal_instructions": "Compost in a home system or municipal collection program.",
        "category": "Composting",
        "color_class": "primary",
    },
    {
        "name": "Electronic",
        "description": "Electronic devices, batteries, and components.",
        "is_recyclable": True,
        "disposal_instructions": "Take to designated e-waste collection centers or retailer take-back programs.",
        "category": "E-Waste",
        "color_class": "secondary",
    },
    {
        "name": "Hazardous",
        "description": "Chemicals, paints, solvents, and other potentially dangerous materials.",
        "is_recyclable": False,
        "disposal_instructions": "Take to hazardous waste facilities. Never dispose in regular trash.",
        "category": "Hazardous",
        "color_class": "accent",
    },
    {
        "name": "Yard Waste",
        "description": "Leaves, branches, grass clippings, and other garden waste.",
        "is_recyclable": True,
        "disposal_instructions": "Compost or use municipal yard waste collection services.",
        "category": "Composting",
        "color_class": "accent",
    },
    {
        "name": "Batteries",
        "description": "Household batteries including alkaline, lithium, and rechargeable types.",
        "is_recyclable": True,
        "disposal_instructions": "Take to battery recycling collection points. Do not dispose in regular trash.",
        "category": "E-Waste",
        "color_class": "accent",
    },
]

_UNSPLASH = "https://images.unsplash.com/{photo}?auto=format&fit=crop&w=800&q=80"

LEARNING_RESOURCES: List[Dict[str, Any]] = [
    {
        "title": "Plastic Recycling Guide",
        "description": "Learn about different types of plastic and how to properly recycle each type based on the resin identification code.",
        "content": "Detailed content about plastic recycling...",
        "image": _UNSPLASH.format(photo="photo-1604187351574-c75ca79f5807"),
        "category": "Guide",
        "category_color": "primary",
    },
    {
        "title": "Composting 101",
        "description": "Discover how to start your own composting system at home and turn kitchen scraps into valuable soil amendments.",
        "content": "Detailed content about composting...",
        "image": _UNSPLASH.format(photo="photo-1542601906990-b4d3fb778b09"),
        "category": "Tutorial",
        "category_color": "accent",
    },
    {
        "title": "E-Waste Management",
        "description": "Learn the proper disposal methods for electronic waste and why it's critical to keep these items out of landfills.",
        "content": "Detailed content about e-waste management...",
        "image": _UNSPLASH.format(photo="photo-1530587191325-3db32d826c18"),
        "category": "Info",
        "category_color": "secondary",
    },
    {
        "title": "Reducing Single-Use Plastics",
        "description": "Practical tips for reducing your reliance on single-use plastics in everyday life.",
        "content": "Detailed content about reducing plastic usage...",
        "image": _UNSPLASH.format(photo="photo-1605600659873-d808a13e4aba"),
        "category": "Tips",
        "category_color": "primary",
    },
    {
        "title": "Understanding Waste Symbols",
        "description": "A guide to common recycling and waste disposal symbols found on packaging.",
        "content": "Detailed content about waste symbols...",
        "image": _UNSPLASH.format(photo="photo-1532996122724-e3c354a0b15b"),
        "category": "Guide",
        "category_color": "secondary",
    },
    {
        "title": "Hazardous Waste Safety",
        "description": "How to identify, handle, and properly dispose of hazardous household waste.",
        "content": "Detailed content about hazardous waste safety...",
        "image": _UNSPLASH.format(photo="photo-1611284446314-60a58ac0deb9"),
        "category": "Safety",
        "category_color": "accent",
    },
]

RECYCLING_CENTERS: List[Dict[str, Any]] = [
    {
        "name": "EcoCycle Recycling Center",
        "address": "123 Green Street, Eco City",
        "latitude": 37.7749,
        "longitude": -122.4194,
        "phone": "(555) 123-4567",
        "website": "https://www.ecocycle.com",
        "hours_of_operation": "Monday-Friday: 8am-6pm, Saturday: 9am-4pm",
    },
    {
        "name": "GreenTech Composting",
        "address": "456 Earth Avenue, Eco City",
        "latitude": 37.7850,
        "longitude": -122.4300,
        "phone": "(555) 234-5678",
        "website": "https://www.greentech.com",
        "hours_of_operation": "Monday-Friday: 7am-5pm, Saturday: 8am-2pm",
    },
    {
        "name": "TechRecycle Solutions",
        "address": "789 Circuit Drive, Eco City",
        "latitude": 37.7695,
        "longitude": -122.4100,
        "phone": "(555) 345-6789",
        "website": "https://www.techrecycle.com",
        "hours_of_operation": "Monday-Saturday: 9am-6pm",
    },
    {
        "name": "Metro Hazardous Waste Facility",
        "address": "101 Safety Boulevard, Eco City",
        "latitude": 37.7600,
        "longitude": -122.4250,
        "phone": "(555) 456-7890",
        "website": "https://www.metrohazardous.com",
        "hours_of_operation": "Tuesday-Saturday: 10am-5pm",
    },
    {
        "name": "Community Recycling Hub",
        "address": "202 Neighborhood Lane, Eco City",
        "latitude": 37.7900,
        "longitude": -122.4000,
        "phone": "(555) 567-8901",
        "website": "https://www.communityrecycling.org",
        "hours_of_operation": "Monday-Sunday: 8am-8pm",
    },
]

# center name -> accepted waste type names
CENTER_WASTE_TYPES: Dict[str, List[str]] = {
    "EcoCycle Recycling Center": ["Plastic", "Paper", "Glass"],
    "GreenTech Composting": ["Organic", "Yard Waste"],
    "TechRecycle Solutions": ["Electronic", "Batteries"],
    "Metro Hazardous Waste Facility": ["Hazardous", "Electronic", "Batteries"],
    "Community Recycling Hub": ["Plastic", "Paper", "Glass", "Metal"],
}
