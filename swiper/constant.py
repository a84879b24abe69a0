"""Editable static seed news and receipt vocabulary."""

from __future__ import annotations

SAMPLE_NEWS: list[dict[str, str]] = [
    {
        "title": "AI Breakthrough in Medical Imaging",
        "content": "Researchers have developed a new AI algorithm that can detect early signs of cancer with 95% accuracy, potentially revolutionizing early diagnosis and treatment.",
        "image_url": "https://images.unsplash.com/photo-1559757148-5c350d0d3c56?w=400&h=300&fit=crop",
        "source": "Tech Daily",
        "category": "Technology",
    },
    {
        "title": "Global Climate Summit Reaches Historic Agreement",
        "content": "World leaders have agreed to ambitious new targets for reducing carbon emissions by 2030, marking a significant step forward in the fight against climate change.",
        "image_url": "https://images.unsplash.com/photo-1560472354-b33ff0c44a43?w=400&h=300&fit=crop",
        "source": "Global News",
        "category": "Environment",
    },
    {
        "title": "SpaceX Successfully Lands on Mars",
        "content": "In a historic moment for space exploration, SpaceX has successfully landed its Starship vehicle on the surface of Mars, opening new possibilities for human colonization.",
        "image_url": "https://images.unsplash.com/photo-1446776811953-b23d0bd75ac2?w=400&h=300&fit=crop",
        "source": "Space Weekly",
        "category": "Science",
    },
    {
        "title": "Revolutionary Quantum Computer Breakthrough",
        "content": "Scientists have achieved quantum supremacy with a new 1000-qubit processor, solving problems that would take classical computers thousands of years in mere minutes.",
        "image_url": "https://images.unsplash.com/photo-1518709268805-4e9042af2176?w=400&h=300&fit=crop",
        "source": "Quantum Today",
        "category": "Technology",
    },
    {
        "title": "New Renewable Energy Milestone Reached",
        "content": "Solar and wind power now generate more electricity than fossil fuels in the European Union, marking a major milestone in the transition to clean energy.",
        "image_url": "https://images.unsplash.com/photo-1509391366360-2e959784a276?w=400&h=300&fit=crop",
        "source": "Energy Report",
        "category": "Environment",
    },
]

AD_CATEGORIES: list[str] = [
    "Luxury Cars",
    "Investment Apps",
    "Weight Loss",
    "Dating Sites",
    "Gaming",
    "Travel",
    "Fashion",
    "Tech Gadgets",
    "Mental Health Apps",
    "Sleep Aids",
    "Anxiety Medication",
    "Financial Planning",
    "Life Insurance",
    "Home Security",
    "Privacy VPNs",
    "Stress Relief",
    "Career Coaching",
    "Self-Help Books",
    "Meditation Apps",
    "Therapy Services",
    "Fitness Tracking",
    "Social Media Management",
]

AD_HOOKS: list[str] = [
    "Immediate Need Detected",
    "High Vulnerability Match",
    "Emotional Trigger Point",
    "Exploitable Interest",
]

NOTICE_LINES: list[str] = [
    "Your digital existence has been processed",
    "Your consciousness has been quantified",
    "Your future behaviors will be optimized",
    "Your reality is now our product",
]

CLOSING_LINES: list[str] = [
    "Your existence has been successfully commodified",
    "Your future behaviors have been predetermined",
    "Your choices are now optimized for monetization",
    "Resistance only improves our prediction models",
]

SURVEILLANCE_NETWORK: dict[str, list[str]] = {
    "Facebook": ["Data Harvested", "Profile Analyzed", "Connections Mapped"],
    "Google": ["Search Patterns Indexed", "Email Contents Scanned", "Location Tracked"],
    "Amazon": ["Purchase History Analyzed", "Wishlist Profiled", "Browse Pattern Recorded"],
    "Twitter": ["Sentiment Analyzed", "Network Mapped", "Influence Calculated"],
    "Banking Apps": ["Transactions Monitored", "Spending Analyzed", "Financial Status Tracked"],
    "Health Apps": ["Biometrics Recorded", "Sleep Patterns Monitored", "Stress Levels Tracked"],
}

AGE_RANGES = ["18-24", "25-34", "35-44", "45-54", "55+"]
INCOME_LEVELS = ["Low", "Medium", "High", "Premium"]
POLITICAL_LEANINGS = ["Conservative", "Moderate", "Liberal", "Apolitical"]
SLEEP_QUALITIES = ["Poor", "Irregular", "Monitored"]
MENTAL_STATES = ["Fatigued", "Stressed", "Distracted", "Susceptible"]
SEARCH_PATTERNS = ["Concerning", "Predictable", "Valuable"]
INTEREST_VECTORS = ["Politics", "Technology", "Health", "Finance"]
SCROLL_PATTERNS = ["Anxious", "Thorough", "Skimming"]
EYE_TRACKING = ["Fixated", "Scanning", "Avoiding"]
LOCATION_ZONES = ["Urban", "Suburban", "Rural"]
SOCIAL_CLASSES = ["Aspirational", "Struggling", "Comfortable", "Elite"]
NEXT_PURCHASES = ["Electronics", "Clothing", "Food", "Services"]
VULNERABILITIES = ["Financial Stress", "Career Anxiety", "Health Concerns", "Social Pressure", "FOMO Index"]
