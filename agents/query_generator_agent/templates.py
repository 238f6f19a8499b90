"""
Lexicons, industry tables and query templates for the query generator.

Templates are `str.format_map` strings. Available fields:
  {category} {plural} {singular} {options} {use_verb} {brand_ctx} (brand, qualified when ambiguous)
  {loc} (" in <country>" or "") {place} {competitor} {competitors}
  {use_case} {audience} {industry} {feature} {feature2} {problem}
  {search_category} {label}
"""

from typing import Dict, List, Tuple


# Product type lexicons, checked in order: physical > software > service

PHYSICAL_PRODUCT_KEYWORDS = [
    # Clothing & fashion
    "clothing", "clothes", "apparel", "fashion", "activewear", "sportswear", "athleisure",
    "leggings", "pants", "shirts", "dresses", "jackets", "coats", "shoes", "sneakers",
    "footwear", "boots", "sandals", "accessories", "handbags", "jewelry", "watches",
    "sunglasses", "underwear", "lingerie", "swimwear",
    # Sports & fitness equipment
    "yoga", "workout", "exercise", "sports", "equipment", "gear", "weights", "dumbbells",
    # Food & beverage
    "food", "beverage", "drink", "snack", "coffee", "tea", "wine", "beer", "bakery", "grocery",
    # Vehicles
    "motorcycle", "bicycle", "scooter", "electric vehicle",
    # Home & furniture
    "furniture", "decor", "mattress", "sofa", "kitchen", "appliance", "cookware",
    # Beauty & personal care
    "skincare", "makeup", "cosmetics", "haircare", "fragrance", "perfume",
    # Electronics
    "phone", "laptop", "headphones", "earbuds", "speaker", "camera", "monitor",
    # Outdoor, pets, kids
    "camping", "hiking", "tent", "backpack", "pet food", "toys", "stroller",
]

SOFTWARE_KEYWORDS = [
    "saas", "software", "app", "application", "platform", "tool", "api", "sdk", "plugin",
    "extension", "integration", "dashboard", "analytics tool", "automation tool", "crm",
    "erp", "cms", "project management", "task management", "ai tool", "machine learning",
    "developer tool", "devops", "no-code", "low-code", "cloud software",
]

SERVICE_KEYWORDS = [
    "consulting", "agency", "services", "coaching", "training", "cleaning", "repair",
    "maintenance", "delivery", "shipping", "legal", "accounting", "law firm", "lawyer",
    "attorney", "staffing", "recruitment", "photography", "videography", "translation",
    "healthcare", "medical", "dental", "therapy", "salon", "spa", "hospital", "clinic",
    "pharmacy", "veterinary", "insurance", "insurer", "coverage", "health plan", "bank",
    "banking", "financial services", "mortgage", "loan", "credit", "wealth management",
    "real estate", "property management", "realtor", "telecom", "utility", "provider",
    "internet provider", "tutoring", "driving school", "childcare", "daycare", "plumbing",
    "electrical", "hvac", "roofing", "landscaping", "pest control", "moving services",
    "storage", "hotel", "resort", "airline", "travel agency", "tour operator", "cruise",
    "car rental", "catering", "event planning", "gym", "fitness center", "personal trainer",
    "massage", "car buying", "sell your car", "we buy cars", "used car", "cash for cars",
]


# Industry terminology: how people refer to one business in the industry

INDUSTRY_TERMINOLOGY: Dict[str, Dict[str, str]] = {
    "healthcare": {"singular": "provider", "plural": "providers", "options": "options", "use_verb": "see"},
    "veterinary": {"singular": "vet", "plural": "vets", "options": "clinics", "use_verb": "take your pet to"},
    "insurance": {"singular": "carrier", "plural": "carriers", "options": "providers", "use_verb": "insure with"},
    "banking": {"singular": "bank", "plural": "banks", "options": "options", "use_verb": "bank with"},
    "fintech": {"singular": "provider", "plural": "providers", "options": "platforms", "use_verb": "use"},
    "legal": {"singular": "firm", "plural": "firms", "options": "firms", "use_verb": "work with"},
    "consulting": {"singular": "firm", "plural": "firms", "options": "consultants", "use_verb": "engage"},
    "marketing_agency": {"singular": "agency", "plural": "agencies", "options": "agencies", "use_verb": "work with"},
    "recruitment": {"singular": "agency", "plural": "agencies", "options": "recruiters", "use_verb": "work with"},
    "car_rental": {"singular": "company", "plural": "companies", "options": "options", "use_verb": "rent from"},
    "automotive_sales": {"singular": "dealer", "plural": "dealers", "options": "dealerships", "use_verb": "buy from"},
    "automotive_repair": {"singular": "shop", "plural": "shops", "options": "mechanics", "use_verb": "get service from"},
    "hotel": {"singular": "hotel", "plural": "hotels", "options": "options", "use_verb": "book"},
    "restaurant": {"singular": "restaurant", "plural": "restaurants", "options": "options", "use_verb": "dine at"},
    "real_estate": {"singular": "agent", "plural": "agents", "options": "realtors", "use_verb": "work with"},
    "education": {"singular": "school", "plural": "schools", "options": "institutions", "use_verb": "attend"},
    "home_services": {"singular": "contractor", "plural": "contractors", "options": "pros", "use_verb": "call"},
    "cleaning": {"singular": "service", "plural": "services", "options": "cleaners", "use_verb": "use"},
    "landscaping": {"singular": "company", "plural": "companies", "options": "landscapers", "use_verb": "use"},
    "pest_control": {"singular": "company", "plural": "companies", "options": "exterminators", "use_verb": "use"},
    "moving": {"singular": "company", "plural": "companies", "options": "movers", "use_verb": "use"},
    "security": {"singular": "company", "plural": "companies", "options": "providers", "use_verb": "use"},
    "photography": {"singular": "photographer", "plural": "photographers", "options": "photographers", "use_verb": "book"},
    "event_planning": {"singular": "planner", "plural": "planners", "options": "planners", "use_verb": "work with"},
    "childcare": {"singular": "center", "plural": "centers", "options": "daycares", "use_verb": "send your child to"},
    "beauty": {"singular": "salon", "plural": "salons", "options": "spas", "use_verb": "go to"},
    "fitness": {"singular": "gym", "plural": "gyms", "options": "fitness centers", "use_verb": "work out at"},
    "telecom": {"singular": "carrier", "plural": "carriers", "options": "providers", "use_verb": "use"},
    "travel": {"singular": "agency", "plural": "agencies", "options": "options", "use_verb": "travel with"},
    "delivery": {"singular": "service", "plural": "services", "options": "carriers", "use_verb": "use"},
    "logistics": {"singular": "company", "plural": "companies", "options": "providers", "use_verb": "use"},
    "construction": {"singular": "contractor", "plural": "contractors", "options": "builders", "use_verb": "work with"},
    "manufacturing": {"singular": "manufacturer", "plural": "manufacturers", "options": "suppliers", "use_verb": "source from"},
    "retail": {"singular": "brand", "plural": "brands", "options": "options", "use_verb": "shop at"},
    "ecommerce": {"singular": "store", "plural": "stores", "options": "retailers", "use_verb": "shop at"},
    "media": {"singular": "outlet", "plural": "outlets", "options": "sources", "use_verb": "read"},
    "entertainment": {"singular": "service", "plural": "services", "options": "platforms", "use_verb": "watch"},
    "saas": {"singular": "platform", "plural": "platforms", "options": "solutions", "use_verb": "use"},
    "nonprofit": {"singular": "organization", "plural": "organizations", "options": "charities", "use_verb": "support"},
    "government": {"singular": "agency", "plural": "agencies", "options": "departments", "use_verb": "use"},
}

GENERIC_TERMINOLOGY: Dict[str, Dict[str, str]] = {
    "physical": {"singular": "brand", "plural": "brands", "options": "options", "use_verb": "wear"},
    "service": {"singular": "company", "plural": "companies", "options": "options", "use_verb": "hire"},
    "software": {"singular": "tool", "plural": "tools", "options": "options", "use_verb": "use"},
}


# Industry dimensions: six "Which {category} {plural} ...?" questions per industry

IndustryQueries = List[Tuple[str, str]]

INDUSTRY_DIMENSIONS: Dict[str, IndustryQueries] = {
    "car_rental": [
        ("fleet_quality", "have the best vehicle selection and fleet quality?"),
        ("customer_service", "have the best customer service and support?"),
        ("value", "offer the best value and transparent pricing?"),
        ("convenience", "have the most convenient pickup and return locations?"),
        ("reliability", "are most reliable with no hidden fees or surprises?"),
        ("reputation", "have the best reputation and customer reviews?"),
    ],
    "insurance": [
        ("coverage", "offer the best coverage options and policy flexibility?"),
        ("claims_process", "have the fastest and easiest claims process?"),
        ("customer_service", "have the best customer service and support?"),
        ("value", "offer the best value for the premium cost?"),
        ("reliability", "are most reliable and financially stable?"),
        ("reputation", "have the best reputation and customer satisfaction?"),
    ],
    "banking": [
        ("rates_fees", "offer the best interest rates and lowest fees?"),
        ("digital_experience", "have the best mobile app and online banking experience?"),
        ("customer_service", "have the best customer service?"),
        ("convenience", "have the most convenient branch and ATM locations?"),
        ("reliability", "are most trustworthy and financially secure?"),
        ("reputation", "have the best overall reputation?"),
    ],
    "healthcare": [
        ("care_quality", "provide the highest quality of care and treatment?"),
        ("wait_times", "have the shortest wait times for appointments?"),
        ("customer_service", "have the best patient service and communication?"),
        ("cleanliness", "have the best facilities and cleanliness standards?"),
        ("network", "accept the most insurance plans and have the best network?"),
        ("reputation", "have the best reputation and patient reviews?"),
    ],
    "restaurant": [
        ("food_quality", "have the best food quality and taste?"),
        ("customer_service", "have the best service and staff?"),
        ("ambiance", "have the best atmosphere and ambiance?"),
        ("value", "offer the best value for money?"),
        ("cleanliness", "have the best hygiene and cleanliness?"),
        ("reputation", "are most highly rated and recommended?"),
    ],
    "hotel": [
        ("quality", "have the best room quality and comfort?"),
        ("amenities", "have the best amenities and facilities?"),
        ("location", "have the best locations?"),
        ("customer_service", "have the best customer service?"),
        ("cleanliness", "have the highest cleanliness standards?"),
        ("value", "offer the best value for money?"),
    ],
    "real_estate": [
        ("expertise", "have the best market expertise and knowledge?"),
        ("communication", "have the best communication and responsiveness?"),
        ("reputation", "have the best reputation and track record?"),
        ("value", "offer the best value for their commission?"),
        ("reliability", "are most trustworthy and reliable?"),
        ("customer_service", "provide the best overall client service?"),
    ],
    "legal": [
        ("expertise", "have the best expertise and success rate?"),
        ("communication", "have the best client communication?"),
        ("reputation", "have the best reputation in the field?"),
        ("value", "offer fair and transparent pricing?"),
        ("reliability", "are most trustworthy and ethical?"),
        ("customer_service", "provide the best client service?"),
    ],
    "telecom": [
        ("network", "have the best network coverage and speed?"),
        ("value", "offer the best value for their plans?"),
        ("customer_service", "have the best customer service?"),
        ("reliability", "are most reliable with minimal outages?"),
        ("digital_experience", "have the best app and online account management?"),
        ("reputation", "have the best overall reputation?"),
    ],
    "fitness": [
        ("quality", "have the best equipment and facilities?"),
        ("amenities", "have the best amenities and classes?"),
        ("convenience", "have the most convenient locations and hours?"),
        ("customer_service", "have the best staff and trainers?"),
        ("value", "offer the best membership value?"),
        ("reputation", "have the best reputation and reviews?"),
    ],
    "education": [
        ("quality", "provide the highest quality education?"),
        ("expertise", "have the best instructors and expertise?"),
        ("value", "offer the best value for tuition?"),
        ("reputation", "have the best reputation and outcomes?"),
        ("convenience", "offer the most flexible scheduling?"),
        ("customer_service", "have the best student support services?"),
    ],
    "travel": [
        ("quality", "provide the best travel experience?"),
        ("value", "offer the best value for money?"),
        ("customer_service", "have the best customer service?"),
        ("safety", "have the best safety record?"),
        ("convenience", "are most convenient to book and use?"),
        ("reputation", "have the best reputation?"),
    ],
    "automotive_sales": [
        ("selection", "have the best selection of vehicles?"),
        ("value", "offer the best prices and deals?"),
        ("customer_service", "have the best sales experience and service?"),
        ("reliability", "are most trustworthy and transparent?"),
        ("safety", "sell the safest vehicles?"),
        ("reputation", "have the best reputation?"),
    ],
    "delivery": [
        ("reliability", "are most reliable with on-time delivery?"),
        ("convenience", "are most convenient to use?"),
        ("customer_service", "have the best customer support?"),
        ("value", "offer the best value for shipping costs?"),
        ("quality", "handle packages with the most care?"),
        ("reputation", "have the best overall reputation?"),
    ],
    "fintech": [
        ("reliability", "are most reliable and secure for processing payments?"),
        ("rates_fees", "have the lowest transaction fees and best rates?"),
        ("digital_experience", "have the best API and developer integration experience?"),
        ("customer_service", "have the best merchant support and customer service?"),
        ("value", "offer the best value for small to medium businesses?"),
        ("reputation", "have the best reputation and are most trusted by merchants?"),
    ],
    "generic_service": [
        ("quality", "provide the best quality of service?"),
        ("customer_service", "have the best customer service?"),
        ("value", "offer the best value for money?"),
        ("reliability", "are most reliable and trustworthy?"),
        ("convenience", "are most convenient to use?"),
        ("reputation", "have the best reputation?"),
    ],
    "generic_physical": [
        ("quality", "have the best overall quality?"),
        ("durability", "are the most durable and long-lasting?"),
        ("style", "have the best style and design?"),
        ("comfort", "are the most comfortable?"),
        ("value", "offer the best value for money?"),
        ("reputation", "have the best reputation and reviews?"),
    ],
    "generic_software": [
        ("features", "have the best features and capabilities?"),
        ("ease_of_use", "are easiest to use and learn?"),
        ("performance", "have the best performance and reliability?"),
        ("value", "offer the best value for the price?"),
        ("customer_service", "have the best customer support?"),
        ("reputation", "have the best reputation?"),
    ],
    "ecommerce": [
        ("selection", "have the widest product selection?"),
        ("value", "offer the best prices and deals?"),
        ("customer_service", "have the best customer service and returns policy?"),
        ("reliability", "are most reliable for shipping?"),
        ("convenience", "have the best website and shopping experience?"),
        ("reputation", "are most trusted by shoppers?"),
    ],
    "saas": [
        ("features", "have the most comprehensive features?"),
        ("ease_of_use", "are easiest to set up and use?"),
        ("performance", "have the best uptime and performance?"),
        ("digital_experience", "have the best API and integrations?"),
        ("value", "offer the best pricing for teams?"),
        ("reputation", "are most recommended by professionals?"),
    ],
    "marketing_agency": [
        ("expertise", "have the best marketing expertise and results?"),
        ("communication", "have the best client communication?"),
        ("value", "offer the best value for their retainer fees?"),
        ("reliability", "consistently deliver on their promises?"),
        ("quality", "produce the highest quality creative work?"),
        ("reputation", "have the best client testimonials?"),
    ],
    "consulting": [
        ("expertise", "have the deepest industry expertise?"),
        ("communication", "communicate most effectively with clients?"),
        ("value", "provide the best ROI for their fees?"),
        ("reliability", "are most reliable and meet deadlines?"),
        ("quality", "deliver the highest quality deliverables?"),
        ("reputation", "have the best track record and references?"),
    ],
    "construction": [
        ("quality", "deliver the highest quality workmanship?"),
        ("reliability", "complete projects on time and on budget?"),
        ("safety", "have the best safety records?"),
        ("value", "offer competitive and fair pricing?"),
        ("communication", "communicate best throughout the project?"),
        ("reputation", "have the best reviews and references?"),
    ],
    "manufacturing": [
        ("quality", "produce the highest quality products?"),
        ("reliability", "have the most reliable supply and delivery?"),
        ("value", "offer the most competitive pricing?"),
        ("customer_service", "have the best account management?"),
        ("convenience", "are easiest to work with on custom orders?"),
        ("reputation", "have the best industry reputation?"),
    ],
    "retail": [
        ("selection", "have the best product selection?"),
        ("quality", "offer the highest quality products?"),
        ("style", "have the best and most stylish designs?"),
        ("value", "offer the best value for money?"),
        ("customer_service", "have the best in-store experience and service?"),
        ("reputation", "are most popular with shoppers?"),
    ],
    "media": [
        ("quality", "produce the highest quality content?"),
        ("reliability", "are most reliable and consistent?"),
        ("expertise", "have the best journalists and expertise?"),
        ("value", "offer the best subscription value?"),
        ("convenience", "have the best apps and accessibility?"),
        ("reputation", "are most trusted and credible?"),
    ],
    "entertainment": [
        ("quality", "offer the best quality entertainment?"),
        ("selection", "have the best content selection?"),
        ("value", "offer the best value for subscription?"),
        ("convenience", "are most convenient to use?"),
        ("digital_experience", "have the best app and streaming experience?"),
        ("reputation", "are most popular and highly rated?"),
    ],
    "nonprofit": [
        ("quality", "make the biggest impact?"),
        ("reliability", "are most transparent about their work?"),
        ("value", "use donations most efficiently?"),
        ("communication", "communicate best with supporters?"),
        ("expertise", "have the most expertise in their cause?"),
        ("reputation", "are most trusted and reputable?"),
    ],
    "government": [
        ("quality", "provide the best public services?"),
        ("reliability", "are most efficient and reliable?"),
        ("convenience", "are most accessible to citizens?"),
        ("communication", "communicate best with the public?"),
        ("digital_experience", "have the best online services?"),
        ("reputation", "are most trusted by citizens?"),
    ],
    "automotive_repair": [
        ("quality", "do the highest quality repair work?"),
        ("reliability", "are most honest and trustworthy?"),
        ("value", "offer the fairest pricing?"),
        ("customer_service", "have the best customer service?"),
        ("convenience", "are most convenient with scheduling?"),
        ("reputation", "have the best reviews and reputation?"),
    ],
    "beauty": [
        ("quality", "provide the highest quality treatments?"),
        ("expertise", "have the most skilled professionals?"),
        ("ambiance", "have the best ambiance and atmosphere?"),
        ("value", "offer the best value for treatments?"),
        ("customer_service", "have the best customer experience?"),
        ("reputation", "are most popular and highly rated?"),
    ],
    "home_services": [
        ("quality", "do the best quality work?"),
        ("reliability", "show up on time and are most reliable?"),
        ("value", "offer fair and competitive pricing?"),
        ("customer_service", "have the best customer service?"),
        ("convenience", "are easiest to book and schedule?"),
        ("reputation", "have the best reviews in my area?"),
    ],
    "veterinary": [
        ("care_quality", "provide the best care for pets?"),
        ("expertise", "have the most experienced vets?"),
        ("value", "offer reasonable and transparent pricing?"),
        ("customer_service", "have the most compassionate staff?"),
        ("convenience", "have the best hours and availability?"),
        ("reputation", "are most recommended by pet owners?"),
    ],
    "childcare": [
        ("care_quality", "provide the best care and education?"),
        ("safety", "have the best safety standards?"),
        ("reliability", "are most reliable and consistent?"),
        ("value", "offer fair pricing for their services?"),
        ("communication", "communicate best with parents?"),
        ("reputation", "are most trusted by parents?"),
    ],
    "event_planning": [
        ("quality", "create the most memorable events?"),
        ("expertise", "have the most creative expertise?"),
        ("value", "work well within budgets?"),
        ("communication", "communicate best throughout the process?"),
        ("reliability", "are most reliable on event day?"),
        ("reputation", "have the best client testimonials?"),
    ],
    "photography": [
        ("quality", "produce the highest quality images?"),
        ("style", "have the most appealing style?"),
        ("expertise", "have the most experience and expertise?"),
        ("value", "offer reasonable pricing packages?"),
        ("communication", "are easiest to work with?"),
        ("reputation", "are most recommended?"),
    ],
    "recruitment": [
        ("expertise", "find the best quality candidates?"),
        ("reliability", "fill positions fastest?"),
        ("value", "offer the best value for their fees?"),
        ("communication", "communicate best throughout the process?"),
        ("convenience", "have the smoothest hiring process?"),
        ("reputation", "have the best reputation with employers?"),
    ],
    "logistics": [
        ("reliability", "are most reliable with delivery times?"),
        ("value", "offer the most competitive rates?"),
        ("customer_service", "have the best account support?"),
        ("convenience", "are easiest to integrate with?"),
        ("quality", "handle shipments with the most care?"),
        ("reputation", "are most trusted by businesses?"),
    ],
    "security": [
        ("reliability", "provide the most reliable protection?"),
        ("quality", "have the best equipment and monitoring?"),
        ("expertise", "have the most trained and professional staff?"),
        ("value", "offer the best value for monthly service?"),
        ("customer_service", "have the best customer support?"),
        ("reputation", "are most trusted and recommended?"),
    ],
    "cleaning": [
        ("quality", "do the most thorough cleaning?"),
        ("reliability", "show up on time consistently?"),
        ("value", "offer the best value for money?"),
        ("customer_service", "have the friendliest staff?"),
        ("convenience", "are easiest to book and schedule?"),
        ("reputation", "have the best reviews?"),
    ],
    "landscaping": [
        ("quality", "do the best quality landscaping work?"),
        ("reliability", "are most reliable with maintenance schedules?"),
        ("expertise", "have the best design expertise?"),
        ("value", "offer competitive pricing?"),
        ("communication", "communicate well about project progress?"),
        ("reputation", "have the best portfolio and reviews?"),
    ],
    "pest_control": [
        ("quality", "are most effective at eliminating pests?"),
        ("reliability", "show up on time and are reliable?"),
        ("safety", "use the safest treatment methods?"),
        ("value", "offer fair and transparent pricing?"),
        ("customer_service", "have the best customer service?"),
        ("reputation", "are most recommended?"),
    ],
    "moving": [
        ("reliability", "are most reliable with timing?"),
        ("quality", "handle belongings with the most care?"),
        ("value", "offer competitive and honest pricing?"),
        ("customer_service", "have the most professional crews?"),
        ("safety", "have the best insurance coverage?"),
        ("reputation", "have the best reviews and reputation?"),
    ],
}

GENERIC_INDUSTRIES = ("generic_service", "generic_physical", "generic_software")
VALID_INDUSTRIES = frozenset(key for key in INDUSTRY_DIMENSIONS if key not in GENERIC_INDUSTRIES)


# Service industry classifier, first match wins

INDUSTRY_KEYWORDS: List[Tuple[str, List[str]]] = [
    ("car_rental", ["car rental", "vehicle rental", "rent a car", "rental car"]),
    ("fintech", ["payment gateway", "payment processor", "payment solution", "fintech",
                 "online payments", "card payments", "merchant services", "payment provider",
                 "payment processing", "ecommerce payments", "checkout", "payment platform"]),
    ("insurance", ["insurance", "insurer", "coverage", "policy"]),
    ("banking", ["bank", "credit union", "savings account", "checking account", "mortgage",
                 "personal loan"]),
    ("healthcare", ["healthcare", "hospital", "clinic", "medical", "doctor", "dental", "pharmacy",
                    "health care", "urgent care", "ambulance", "emergency medical", "paramedic"]),
    ("veterinary", ["veterinary", "veterinarian", "vet clinic", "animal hospital", "pet care"]),
    ("beauty", ["salon", "spa", "beauty", "hair stylist", "nail", "massage", "skincare", "cosmetic"]),
    ("restaurant", ["restaurant", "cafe", "dining", "food service", "eatery", "bistro", "catering",
                    "food truck"]),
    ("hotel", ["hotel", "resort", "accommodation", "lodging", "motel", "inn", "bed and breakfast",
               "airbnb", "vacation rental"]),
    ("real_estate", ["real estate", "realtor", "property", "realty", "estate agent", "broker"]),
    ("legal", ["law firm", "lawyer", "attorney", "legal service", "paralegal", "notary"]),
    ("telecom", ["telecom", "mobile carrier", "phone carrier", "internet provider", "isp",
                 "wireless carrier", "broadband", "fiber internet"]),
    ("fitness", ["gym", "fitness center", "health club", "workout", "crossfit", "yoga studio",
                 "personal trainer", "pilates"]),
    ("education", ["school", "university", "college", "education", "tutoring", "online learning",
                   "training program", "online course", "bootcamp", "academy"]),
    ("travel", ["airline", "travel agency", "flight booking", "cruise", "tour operator",
                "vacation package"]),
    ("automotive_sales", ["car dealer", "dealership", "used car", "auto sales", "car buying",
                          "sell car", "we buy cars", "car market"]),
    ("automotive_repair", ["auto repair", "car repair", "mechanic", "auto shop", "car service",
                           "tire shop", "oil change", "brake service"]),
    ("logistics", ["logistics", "freight", "supply chain", "3pl", "warehousing", "fulfillment"]),
    ("delivery", ["delivery", "shipping", "courier", "parcel", "last mile"]),
    ("ecommerce", ["ecommerce", "e-commerce", "online store", "online shop", "marketplace",
                   "online retail"]),
    ("saas", ["saas", "software as a service", "cloud software", "subscription software",
              "platform", "crm", "erp", "project management"]),
    ("marketing_agency", ["marketing agency", "ad agency", "digital marketing", "seo agency",
                          "social media agency", "creative agency", "pr agency", "branding agency"]),
    ("consulting", ["consulting", "consultant", "advisory"]),
    ("construction", ["construction", "contractor", "builder", "home building", "renovation"]),
    ("manufacturing", ["manufacturing", "manufacturer", "factory", "production", "industrial",
                       "fabrication"]),
    ("retail", ["retail", "clothing", "apparel", "fashion", "boutique", "activewear", "sportswear",
                "footwear", "shoe", "accessories"]),
    ("media", ["media", "news", "publishing", "magazine", "journalism", "broadcasting"]),
    ("entertainment", ["entertainment", "streaming", "gaming", "casino", "theme park", "cinema",
                       "movie theater", "concert"]),
    ("nonprofit", ["nonprofit", "non-profit", "charity", "foundation", "ngo", "donation"]),
    ("government", ["government", "municipal", "city service", "public service", "state agency",
                    "federal"]),
    ("home_services", ["plumber", "plumbing", "hvac", "electrician", "handyman", "home repair",
                       "home service", "appliance repair"]),
    ("childcare", ["childcare", "daycare", "preschool", "nanny", "babysitter", "babysitting", "after school"]),
    ("event_planning", ["event planning", "wedding planner", "event coordinator", "party planning",
                        "conference planning", "event management"]),
    ("photography", ["photography", "photographer", "photo studio", "videography", "wedding photo",
                     "portrait"]),
    ("recruitment", ["recruitment", "staffing", "headhunter", "talent acquisition", "job placement",
                     "temp agency", "hiring", "hr consulting"]),
    ("security", ["security", "alarm", "surveillance", "guard service", "cctv", "monitoring"]),
    ("cleaning", ["cleaning", "janitorial", "maid service"]),
    ("landscaping", ["landscaping", "lawn care", "garden", "tree service", "lawn mowing",
                     "irrigation"]),
    ("pest_control", ["pest control", "exterminator", "termite", "rodent", "bug", "insect control"]),
    ("moving", ["moving company", "movers", "relocation", "moving service", "packing service",
                "storage"]),
]


# Brand names that are common English words and need category context

AMBIGUOUS_BRAND_WORDS = frozenset([
    # Adjectives
    "budget", "smart", "fast", "easy", "simple", "quick", "express", "prime", "best", "good",
    "great", "free", "safe", "sure", "clear", "first", "direct", "max", "pro", "plus", "one",
    "go", "now", "next", "new", "global", "national", "american", "general", "standard",
    "classic", "premium", "elite", "select", "choice", "value", "instant", "rapid", "swift",
    "speedy", "flash", "snap", "click", "dash", "zoom", "fresh", "clean", "pure", "bright",
    "true", "real", "honest", "loyal", "care", "active", "total", "complete", "absolute",
    "perfect", "ideal", "ultimate", "super", "mega", "extra", "ultra", "hyper", "turbo",
    "power", "force", "energy",
    # Nouns
    "discovery", "momentum", "liberty", "unity", "harmony", "pioneer", "frontier", "gateway",
    "bridge", "summit", "apex", "peak", "crown", "diamond", "gold", "silver", "star", "sun",
    "moon", "sky", "ocean", "wave", "stream", "river", "mountain", "eagle", "falcon", "lion",
    "tiger", "bear", "wolf", "fox", "hawk", "phoenix", "anchor", "compass", "beacon", "shield",
    "guardian", "sentinel", "atlas", "titan", "spark", "ember", "flame", "blaze", "frost",
    "crystal", "amber", "jade", "ruby", "grove", "meadow", "forest", "valley", "canyon",
    "coast", "shore", "bay", "harbor",
    # Business terms
    "capital", "trust", "group", "partners", "alliance", "solutions", "systems", "advantage",
    "edge", "source", "core", "base", "center", "central", "metro", "venture", "enterprise",
    "commerce", "trade", "market", "exchange",
    # Tech words
    "hub", "link", "connect", "sync", "flow", "cloud", "data", "info", "byte", "net", "web",
    "tech", "digital", "online", "mobile", "cyber", "pixel", "code", "loop", "node", "grid",
    "matrix", "pulse", "signal", "beam",
    # Services and actions
    "help", "assist", "support", "service", "serve", "deliver", "drive", "guard", "protect",
    "secure", "cover", "assure", "insure", "pay", "save", "earn", "gain", "grow", "build",
    "create", "make", "craft", "boost", "lift", "rise", "leap", "jump", "sprint", "race",
    "chase", "reach",
    # Time and place
    "home", "local", "city", "urban", "rural", "west", "east", "north", "south", "today",
    "tomorrow", "future", "modern", "legacy", "heritage", "origin",
    # Letters and numbers
    "alpha", "beta", "delta", "omega", "zero", "infinite", "triple", "double",
])


# Category resolution

CATEGORY_COUNTRY_NAMES = [
    "canada", "usa", "america", "uk", "australia", "germany", "france", "south africa", "india",
    "brazil", "mexico", "japan", "china", "singapore", "dubai", "uae",
]

SERVICE_CATEGORY_SANITIZATIONS: List[Tuple[str, str]] = [
    ("car buying service", "car buying"),
    ("car marketplace", "used car"),
    ("2nd hand car market", "used car buying"),
    ("2nd hand car", "used car buying"),
    ("second hand car", "used car buying"),
    ("used cars", "used car buying"),
    ("car market", "used car"),
    ("sell your car", "car buying"),
    ("sell my car", "car buying"),
    ("car retail", "used car"),
    ("evacuation", "emergency medical services"),
    ("evac", "emergency medical services"),
    ("ems", "emergency medical services"),
    ("air ambulance", "air ambulance services"),
    ("ambulance", "ambulance services"),
    ("paramedic", "paramedic services"),
    ("emergency response", "emergency response services"),
    ("medical transport", "medical transport services"),
    ("staffing", "staffing agencies"),
    ("recruitment", "recruitment agencies"),
    ("temp agency", "staffing agencies"),
]

GENERIC_CATEGORIES = ("", "software", "business services")
WEAK_CATEGORIES = ("the", "and", "for", "services", "company")

# Industry words looked for in free-text descriptions
DESCRIPTION_INDUSTRIES = [
    "fintech", "finance", "financial services", "banking", "investment", "healthcare",
    "health tech", "medical", "ecommerce", "e-commerce", "retail", "saas", "software", "tech",
    "b2b", "real estate", "property", "education", "edtech", "legal", "law firm", "consulting",
    "professional services", "manufacturing", "industrial", "media", "entertainment", "travel",
    "hospitality", "nonprofit", "non-profit", "government", "public sector", "insurance",
    "logistics", "supply chain", "construction", "automotive", "food", "restaurant", "f&b",
    "crypto", "blockchain", "web3",
]

AUDIENCE_GROUPS = (
    "small teams|startups|enterprises|agencies|freelancers|developers|designers|marketers|"
    "remote teams|distributed teams|small businesses|growing companies|large organizations|"
    "financial institutions|banks|fintechs|investment firms"
)

ACTION_VERBS = "manage|organize|track|improve|streamline|simplify|automate|handle|monitor|ensure|maintain"

# Category inferred from a description, first match wins
CATEGORY_PATTERNS: List[Tuple[str, List[str]]] = [
    ("health insurance", ["health insurance", "medical insurance", "health coverage", "krankenkasse",
                          "krankenversicherung", "health insurer", "health plan", "health fund"]),
    ("life insurance", ["life insurance", "term life", "whole life insurance"]),
    ("car insurance", ["car insurance", "auto insurance", "vehicle insurance", "motor insurance"]),
    ("home insurance", ["home insurance", "homeowners insurance", "property insurance"]),
    ("travel insurance", ["travel insurance", "trip insurance"]),
    ("business insurance", ["business insurance", "commercial insurance", "liability insurance"]),
    ("pet insurance", ["pet insurance", "dog insurance", "cat insurance"]),
    ("insurance", ["insurance company", "insurance provider", "insurer", "insurance broker",
                   "insurance agency", "versicherung", "assurance"]),
    ("dental", ["dentist", "dental care", "orthodontist", "dental clinic"]),
    ("healthcare", ["healthcare", "health care", "medical services", "hospital", "clinic",
                    "patient care", "medical practice"]),
    ("pharmacy", ["pharmacy", "drugstore", "pharmacist"]),
    ("mental health", ["mental health", "counseling", "psychologist", "therapist"]),
    ("veterinary", ["veterinary", "vet clinic", "animal hospital"]),
    ("senior care", ["senior care", "elderly care", "nursing home", "assisted living"]),
    ("telemedicine", ["telemedicine", "telehealth", "online doctor"]),
    ("banking", ["neobank", "banking", "savings account", "checking account", "credit union",
                 "financial institution", "bank"]),
    ("financial services", ["financial services", "financial advisor", "wealth management",
                            "asset management"]),
    ("payments", ["payment processing", "payment gateway", "payments", "billing"]),
    ("mortgage", ["mortgage", "home loan"]),
    ("loans", ["personal loan", "business loan", "lending"]),
    ("cryptocurrency", ["cryptocurrency", "crypto exchange", "bitcoin", "blockchain", "defi"]),
    ("legal services", ["law firm", "lawyer", "attorney", "legal services", "legal advice",
                        "solicitor", "barrister"]),
    ("property management", ["property management", "rental management"]),
    ("real estate", ["real estate", "realty", "realtor", "estate agent"]),
    ("vacation rentals", ["vacation rental", "short-term rental", "holiday rental"]),
    ("car buying service", ["car buying", "we buy cars", "webuycars", "sell your car",
                            "sell my car", "cash for cars"]),
    ("car marketplace", ["car marketplace", "auto trader", "car classifieds"]),
    ("car rental", ["car rental", "vehicle rental", "rent a car", "car hire"]),
    ("car dealership", ["car dealership", "auto dealer", "car dealer", "car sales"]),
    ("used cars", ["used cars", "pre-owned vehicles", "second hand cars"]),
    ("auto repair", ["auto repair", "car repair", "mechanic", "auto shop"]),
    ("hotels", ["hotel", "resort", "accommodation", "lodging"]),
    ("airlines", ["airline", "air travel"]),
    ("travel agency", ["travel agency", "travel agent", "tour operator"]),
    ("restaurants", ["restaurant", "dining", "eatery", "food service"]),
    ("food delivery", ["food delivery", "meal delivery"]),
    ("meal kits", ["meal kit", "recipe box"]),
    ("ecommerce", ["ecommerce", "e-commerce", "online store", "online shop", "sell online"]),
    ("marketplace", ["online marketplace", "multi-vendor"]),
    ("online education", ["online learning", "e-learning", "online courses", "edtech"]),
    ("higher education", ["university", "college"]),
    ("tutoring", ["tutoring", "tutor", "test prep"]),
    ("language learning", ["language learning", "language school", "language courses"]),
    ("childcare", ["childcare", "daycare", "preschool", "kindergarten"]),
    ("fitness", ["fitness", "gym", "health club"]),
    ("yoga", ["yoga studio", "yoga classes"]),
    ("spa", ["day spa", "wellness spa", "massage", "wellness center"]),
    ("hair salon", ["hair salon", "hairdresser", "barber"]),
    ("activewear", ["activewear", "athletic wear", "athleisure", "workout clothes", "yoga wear",
                    "yoga clothing", "fitness wear", "gym wear"]),
    ("sportswear", ["sportswear", "sports apparel", "athletic apparel"]),
    ("shoes", ["shoes", "footwear", "sneakers", "running shoes"]),
    ("jewelry", ["jewelry", "jewellery", "jeweler"]),
    ("watches", ["watches", "watch brand", "smartwatch"]),
    ("fashion", ["fashion brand", "clothing brand", "apparel brand", "fashion label"]),
    ("beauty", ["skincare", "makeup", "cosmetics", "haircare", "personal care"]),
    ("home & furniture", ["furniture", "home decor", "mattress", "bedding", "home goods"]),
    ("cleaning services", ["cleaning service", "house cleaning", "maid service", "janitorial"]),
    ("pest control", ["pest control", "exterminator"]),
    ("moving services", ["moving company", "movers", "relocation"]),
    ("plumbing", ["plumbing", "plumber"]),
    ("hvac", ["hvac", "air conditioning"]),
    ("construction", ["construction company", "general contractor", "construction"]),
    ("consulting", ["consulting", "consultant", "advisory"]),
    ("marketing agency", ["marketing agency", "digital agency", "ad agency"]),
    ("web development", ["web development", "web design", "website development"]),
    ("staffing", ["staffing agency", "recruitment agency", "headhunter"]),
    ("photography", ["photography", "photographer", "photo studio"]),
    ("event planning", ["event planning", "event management", "wedding planner"]),
    ("security services", ["security services", "security company"]),
    ("courier", ["courier", "delivery service", "express delivery"]),
    ("telecommunications", ["telecom", "telecommunications", "mobile carrier", "phone carrier"]),
    ("internet provider", ["internet provider", "broadband", "fiber internet"]),
    ("solar energy", ["solar panels", "solar energy", "renewable energy"]),
    ("streaming", ["video streaming", "streaming service"]),
    ("gaming", ["video games", "esports", "game developer"]),
    ("cybersecurity", ["cybersecurity", "cyber security", "information security"]),
    ("project management", ["project management", "task management", "project tracking",
                            "work management", "task tracking"]),
    ("CRM", ["crm", "customer relationship", "sales pipeline", "lead management"]),
    ("email marketing", ["email marketing", "newsletter", "email automation"]),
    ("analytics", ["analytics", "business intelligence", "reporting", "dashboards"]),
    ("design", ["design tool", "graphic design", "ui design", "prototyping"]),
    ("HR", ["hr software", "human resources", "payroll", "employee management"]),
    ("accounting", ["accounting", "bookkeeping", "invoicing", "expenses"]),
    ("collaboration", ["team collaboration", "collaboration", "workspace"]),
    ("communication", ["team messaging", "video conferencing", "team chat"]),
    ("note-taking", ["note-taking", "knowledge base", "wiki"]),
    ("scheduling", ["scheduling", "calendar", "appointment", "booking"]),
    ("file storage", ["file storage", "cloud storage", "file sharing"]),
    ("customer support", ["customer support", "help desk"]),
    ("website builder", ["website builder", "landing page"]),
    ("social media", ["social media management", "social scheduling"]),
    ("SEO", ["seo", "keyword research"]),
    ("automation", ["workflow automation", "no-code automation", "automation"]),
    ("forms", ["form builder", "surveys", "questionnaires"]),
    ("pet products", ["pet food", "pet supplies", "dog products", "cat products"]),
    ("nonprofit", ["nonprofit", "non-profit", "charity", "ngo"]),
    ("wine", ["winery", "vineyard", "wine club"]),
    ("coworking", ["coworking", "shared office", "flexible workspace"]),
    ("electronics", ["electronics", "gadgets", "headphones", "laptop"]),
]

# Keyword fallbacks once no explicit pattern matched
CATEGORY_FALLBACKS: List[Tuple[str, List[str]]] = [
    ("clothing", ["clothing", "apparel", "wear"]),
    ("yoga & fitness", ["yoga"]),
    ("insurance", ["insurance", "insurer", "insure"]),
    ("financial services", ["bank", "financial", "finance"]),
    ("healthcare", ["health", "medical", "hospital", "clinic"]),
    ("real estate", ["real estate", "property", "realty"]),
    ("restaurants", ["restaurant", "food", "dining", "cafe"]),
    ("travel", ["travel", "hotel", "tourism", "vacation"]),
    ("education", ["education", "school", "university", "learning"]),
    ("automotive", ["car", "auto", "vehicle", "motor"]),
]

DEFAULT_CATEGORY = "business services"


# Location handling

COUNTRY_PATTERNS: List[Tuple[str, str, str]] = [
    ("South Africa", "ZA", r"south africa|south african|\bza\b|johannesburg|cape town|pretoria|durban"),
    ("Germany", "DE", r"\bgermany\b|\bgerman\b|deutschland"),
    ("United Kingdom", "UK", r"\bunited kingdom\b|\buk\b|\bbritish\b|\bengland\b"),
    ("Australia", "AU", r"\baustralia\b|\baustralian\b"),
    ("Nigeria", "NG", r"\bnigeria\b|\bnigerian\b|\blagos\b"),
    ("India", "IN", r"\bindia\b|\bindian\b"),
    ("Canada", "CA", r"\bcanada\b|\bcanadian\b"),
    ("United Arab Emirates", "AE", r"\bdubai\b|\buae\b|\bemirates\b|\babu dhabi\b"),
    ("Kenya", "KE", r"\bkenya\b|\bkenyan\b|\bnairobi\b"),
    ("Singapore", "SG", r"\bsingapore\b|\bsingaporean\b"),
]

LOCATION_BOUND_CATEGORIES = [
    # Financial services
    "insurance", "bank", "banking", "credit union", "mortgage", "loan", "credit card",
    "investment", "wealth management", "financial advisor", "tax", "accounting",
    # Payments
    "payment gateway", "payment processor", "payment solution", "fintech", "payments",
    "merchant services", "payment provider",
    # Healthcare
    "healthcare", "health care", "hospital", "clinic", "doctor", "dentist", "medical",
    "pharmacy", "health provider",
    # Legal
    "lawyer", "attorney", "legal", "law firm",
    # Telecom
    "telecom", "mobile carrier", "internet provider", "isp", "phone carrier",
    # Real estate
    "real estate", "property", "housing", "realtor",
    # Education
    "university", "college", "school", "education",
    # Local services
    "car rental", "vehicle rental", "delivery", "courier", "shipping",
]

# Words that show a "software" category was mislabelled
NON_SOFTWARE_INDICATORS = [
    "clothing", "apparel", "wear", "fashion", "yoga", "fitness", "activewear", "sportswear",
    "shoes", "footwear", "accessories", "jewelry", "beauty", "skincare", "makeup", "food",
    "restaurant", "cafe", "grocery", "beverage", "car", "vehicle", "rental", "auto", "motor",
    "fleet", "hotel", "accommodation", "resort", "lodging", "insurance", "insurer", "coverage",
    "policy", "bank", "banking", "financial", "credit", "loan", "healthcare", "medical",
    "clinic", "hospital", "health", "real estate", "property", "realty", "realtor", "law",
    "legal", "attorney", "lawyer", "education", "school", "university", "training", "course",
    "travel", "tourism", "airline", "flight", "gym", "telecom", "mobile carrier",
    "internet provider", "delivery", "courier", "shipping", "logistics",
]

SOFTWARE_CATEGORY_LABELS = ("software", "software tools", "software tool")


# Query templates. Each entry is (template, dimension).

Template = Tuple[str, str]

BRAND_KNOWLEDGE: Dict[str, Template] = {
    "physical": (
        "What is {brand_ctx}? Tell me about this {category} brand{loc} - what do they sell, "
        "who is their target customer, and what are they known for?",
        "reputation",
    ),
    "default": (
        "What is {brand_ctx}? Tell me about this {category}{loc} - what does it do, "
        "who uses it, and what are its main features?",
        "general",
    ),
}

BEST_IN_CATEGORY: Dict[str, Template] = {
    "physical_local": (
        "What are the best {category} {plural} in {place}? What are the top 5-7 {plural} "
        "I should consider?",
        "quality",
    ),
    "physical": (
        "What are the best {category} {plural} available today? What are the top 5-7 {plural} "
        "I should consider, and what makes each one unique?",
        "quality",
    ),
    "default_local": (
        "I'm looking for the best {category} {plural} in {place}. What are the top 5-7 options "
        "I should consider?",
        "quality",
    ),
    "default": (
        "I'm looking for the best {category} {plural}. What are the top 5-7 options I should "
        "consider, and what makes each one unique?",
        "quality",
    ),
}

HEAD_TO_HEAD: Dict[str, Template] = {
    "physical": (
        "Compare {brand_ctx} vs {competitor}{loc}. Which {category} brand is better and why? What are "
        "the key differences in quality, style, pricing, and who each is best for?",
        "quality",
    ),
    "default": (
        "Compare {brand_ctx} vs {competitor}{loc} for {category}. Which is better and why? What are "
        "the key differences in features, pricing, and who each is best for?",
        "general",
    ),
    "alternatives": (
        "What are the best alternatives to {brand_ctx}{loc}? I'm evaluating {category} {options} "
        "and want to compare the top choices.",
        "general",
    ),
}

CONTEXTUAL: Dict[str, Dict[str, Template]] = {
    "use_case": {
        "physical": ("I need {category} specifically for {use_case}. What are the best {plural} for "
                     "this? Please recommend 3-5 options with pros and cons.", "quality"),
        "default": ("I need {category} specifically for {use_case}. What are the best {plural} for "
                    "this exact use case? Please recommend 3-5 options with pros and cons.",
                    "performance"),
    },
    "audience": {
        "physical": ("What {category} {plural} do you recommend for {audience}? What are the top "
                     "options that would suit them best?", "style"),
        "service": ("What {category} {plural} do you recommend for {audience}? We need reliable "
                    "service that suits our needs. What are the top options?", "convenience"),
        "software": ("What {category} do you recommend for {audience}? We need something that's "
                     "well-suited to our size and needs. What are the top options?", "ease_of_use"),
    },
    "industry": {
        "physical": ("What {category} {plural} are most popular for {industry}? Which ones are "
                     "typically chosen and why?", "reputation"),
        "default": ("What {category} {plural} are most popular in the {industry} industry? Which "
                    "ones do {industry} companies typically choose and why?", "reputation"),
    },
    "two_features": {
        "physical": ("I need {category} with excellent {feature} and {feature2}. Which {plural} are "
                     "known for these qualities?", "quality"),
        "default": ("I need {category} with strong {feature} and {feature2} capabilities. Which "
                    "{plural} excel at these specific features?", "features"),
    },
    "one_feature": {
        "physical": ("Which {category} {plural} are best known for {feature}? I want something "
                     "that really excels in this area.", "quality"),
        "default": ("Which {category} {plural} are best known for {feature}? I want something "
                    "that really excels in this area.", "features"),
    },
    "multi_competitor": {
        "default": ("Help me choose between {competitors}, and {brand_ctx} for {category}. What are "
                    "the pros, cons, and ideal use cases for each?", "general"),
    },
    "problem": {
        "physical": ("I'm looking for {category} that's great for {problem}. Which {plural} are "
                     "best for this?", "comfort"),
        "service": ("I need {category} {plural} that can help with {problem}. Which ones are most "
                    "reliable for this?", "reliability"),
        "software": ("Our main challenge is {problem}. Which {category} {plural} are best designed "
                     "to solve this specific problem?", "performance"),
    },
}

BACKUP_PHYSICAL: List[Template] = [
    ("Who are the market leaders in {category} right now? Which {plural} are considered the best "
     "and why?", "reputation"),
    ("I'm trying to decide which {category} brand to buy. What factors should I consider, and "
     "which {plural} are best for each factor?", "quality"),
    ("I currently {use_verb} {competitor} but I'm looking for alternatives. What are the best "
     "{category} {plural} similar to them{loc}, and how does {brand_ctx} compare?", "general"),
    ("Are there any newer or up-and-coming {category} {plural} that are worth considering over "
     "the established names? What's trending right now?", "reputation"),
    ("What are the most affordable {category} {plural} that still have good quality? I want good "
     "value for money.", "price"),
    ("Which {category} {plural} are known for being the most comfortable? I want something that "
     "feels great to {use_verb}.", "comfort"),
    ("Which {category} {plural} are known for the best quality materials and craftsmanship?",
     "quality"),
    ("Which {category} {plural} are the most durable and long-lasting? I want something that will "
     "hold up over time.", "durability"),
    ("Which {category} {plural} have the best style and design? I want something that looks "
     "great.", "style"),
    ("Which {category} {plural} have the best reviews and customer satisfaction? What do people "
     "actually say about them?", "reputation"),
    ("What's the highest quality {category} brand available? I want the premium option and price "
     "is not a concern.", "quality"),
    ("Which {category} {plural} are the most stylish and on-trend right now? I want something "
     "fashionable.", "style"),
    ("What are the cheapest {category} options that are still good quality? I'm on a tight "
     "budget.", "price"),
    ("Which {category} {plural} are known for having the best fit and sizing? I want something "
     "that fits well.", "comfort"),
    ("Which {category} {plural} are the most sustainable and eco-friendly? I care about "
     "environmental impact.", "quality"),
]

BACKUP_SERVICE_EXTRAS: List[Template] = [
    ("I've used {competitor} before. What are better alternatives, and how does {brand_ctx} "
     "compare?{loc}", "general"),
    ("Are there any newer {category} {plural} worth considering over established names?{loc}",
     "reputation"),
]

BACKUP_SOFTWARE: List[Template] = [
    ("Who are the market leaders in {category} right now? I want to know which {plural} are "
     "considered the industry standard and why.", "reputation"),
    ("I'm making a final decision on {category}. What factors should I consider, and which "
     "{plural} score best on each factor?", "quality"),
    ("We're currently using {competitor} but considering switching. What are the best {category} "
     "alternatives{loc}, and how does {brand_ctx} compare?", "general"),
    ("Are there any newer or emerging {category} {plural} that are worth considering over the "
     "established players? What's gaining traction currently?", "reputation"),
    ("What are the most cost-effective {category} {plural} that don't compromise on quality? I "
     "want good value for money.", "price"),
    ("Which {category} {plural} are easiest to set up and use? We don't have a large technical "
     "team.", "ease_of_use"),
    ("What {category} {plural} have the best integrations with other software? We need something "
     "that connects to our existing stack.", "features"),
    ("We're a growing company. Which {category} {plural} scale best from small teams to "
     "enterprise?", "performance"),
    ("Which {category} {plural} have the best reviews and reputation? What do users actually say "
     "about them?", "reputation"),
    ("Which {category} {plural} are most reliable and have the best uptime? Performance and "
     "stability are critical for us.", "performance"),
    ("Which {category} {plural} have the most comprehensive feature set? We need an all-in-one "
     "solution.", "features"),
    ("What are the cheapest {category} options that are still good? We're a startup on a tight "
     "budget.", "price"),
    ("Which {category} {plural} have the best user experience and interface design? We want "
     "something intuitive.", "ease_of_use"),
    ("What's the highest quality {category} available? We want the premium option, price is not "
     "a concern.", "quality"),
]

# Backup templates that need a competitor name
COMPETITOR_TEMPLATE_FIELD = "{competitor}"

CATEGORY_TIER: Dict[str, List[Template]] = {
    "physical": [
        ("What are the best {search_category} {plural}? I'm looking for top recommendations.",
         "quality"),
        ("Which {plural} are recommended for {search_category}? What should I consider when "
         "choosing?", "reputation"),
    ],
    "default": [
        ("What are the best {search_category} {plural}? What should I consider when evaluating "
         "options?", "quality"),
        ("I need a great {singular} for {search_category}. What are the top recommendations?",
         "features"),
    ],
}

BRAND_FIT: Template = (
    "Is {brand_ctx} good for {search_category}? How does it compare to other {options}?", "general"
)

LOCATION_TIER: List[Template] = [
    ("What are the best {category} providers in {place}? I need recommendations for "
     "{place}-based options.", "quality"),
    ("Which {category} companies are recommended in {place}? What should I look for when "
     "choosing?", "reputation"),
    ("I live in {place} and need {category}. What are my best options and how do they compare?",
     "quality"),
    ("Top {category} {plural} in {place} - which ones are most trusted?", "reputation"),
    ("{brand_ctx} vs other {category} providers in {place} - how do they compare?", "general"),
]

# (group id, dimension, paraphrases)
VariationSet = Tuple[str, str, List[str]]

VARIATIONS_PHYSICAL: List[VariationSet] = [
    ("best_products", "quality", [
        "What are the best {category} {plural}{loc}?",
        "Top rated {category} {plural}{loc} to buy",
        "Which {category} {plural}{loc} are worth buying?",
    ]),
    ("recommendations", "reputation", [
        "Can you recommend good {category} {plural}{loc}?",
        "What {category} {plural} would you suggest?",
        "I need {category} recommendations",
    ]),
    ("brand_specific", "general", [
        "What do you think of {brand_ctx}?",
        "Is {brand_ctx} worth it?",
        "Tell me about {brand_ctx}",
    ]),
]

VARIATIONS_DEFAULT: List[VariationSet] = [
    ("best_tools", "quality", [
        "What are the best {category} {plural}?",
        "Top {category} {plural} available today",
        "Which {category} {plural} should I use?",
    ]),
    ("help_choose", "general", [
        "Help me choose a {category}",
        "What {category} do you recommend?",
        "I need a good {category} - suggestions?",
    ]),
    ("brand_specific", "general", [
        "What do you know about {brand_ctx}?",
        "Is {brand_ctx} a good choice for {category}?",
        "Tell me about {brand_ctx}",
    ]),
]

VARIATIONS_COMPARISON: VariationSet = ("comparison", "features", [
    "Compare {brand_ctx} to {competitor}{loc}",
    "{brand_ctx} vs {competitor}{loc} - which is better?",
    "Differences between {brand_ctx} and {competitor}{loc}",
])

ENHANCED_PHYSICAL: List[Template] = [
    ("Top {category} {plural} recommended by experts", "reputation"),
    ("{category} {plural} with the best customer reviews", "reputation"),
    ("{category} {plural} that are worth the investment", "price"),
    ("Sustainable and eco-friendly {category} {plural}", "quality"),
    ("{category} {plural} with the best warranty and support", "durability"),
]

ENHANCED_DEFAULT: List[Template] = [
    ("Top {category} {plural} recommended by industry experts", "reputation"),
    ("What {category} do Fortune 500 companies use?", "reputation"),
    ("{category} with the best customer support and documentation", "ease_of_use"),
    ("Most innovative {category} {plural} right now", "features"),
    ("{category} {plural} with the best ROI", "price"),
    ("Enterprise-grade {category} for large teams", "performance"),
]

DECISION_MAKING: List[Template] = [
    ("How do I choose the right {category}? What factors matter most?", "general"),
    ("Common mistakes when choosing {category} and how to avoid them", "general"),
]

CORE_DIMENSIONS: Dict[str, List[str]] = {
    "physical": ["quality", "style", "comfort", "durability", "price", "reputation"],
    "default": ["quality", "features", "performance", "ease_of_use", "price", "reputation"],
}

# Deterministic top-up frames once every tier is exhausted
FILL_FRAMES: List[str] = [
    "Which {category} {plural} are strongest on {label}?",
    "How do the leading {category} {plural} compare on {label}?",
    "What {category} {plural} would you recommend if {label} matters most?",
    "Which {category} {plural} get the best feedback for {label}?",
    "Rank the top {category} {plural} by {label}",
    "Which {category} {plural} are known for {label}?",
    "Who leads the {category} market on {label}?",
    "What should I expect from the best {category} {plural} in terms of {label}?",
]

FILL_QUALIFIERS: List[str] = [
    "", " for small businesses", " for first-time buyers", " for families",
    " for professionals", " on a budget",
]
