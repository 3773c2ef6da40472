from __future__ import annotations

from app.domain.entities.coach import CoachCandidate
from app.domain.entities.location import Location


FALLBACK_LOCATIONS: tuple[Location, ...] = (
    Location(
        id="lochwinnoch",
        name="Lochwinnoch — Lochbarr Services Leisure Centre",
        city="Lochwinnoch",
        venue="Lochbarr Services Leisure Centre",
        address="TBC",
        features=("3G surface", "Indoor space", "Parking"),
    ),
    Location(
        id="airdrie",
        name="Airdrie — Venue TBC",
        city="Airdrie",
        venue="Venue TBC",
        address="TBC",
        features=("Floodlit pitches", "Changing rooms", "Easy access"),
    ),
    Location(
        id="east-kilbride",
        name="East Kilbride — Venue TBC",
        city="East Kilbride",
        venue="Venue TBC",
        address="TBC",
        features=("Multiple pitches", "Parent viewing", "Modern facilities"),
    ),
    Location(
        id="glasgow-south",
        name="Glasgow South / Castlemilk — Venue TBC",
        city="Glasgow South / Castlemilk",
        venue="Venue TBC",
        address="TBC",
        features=("All-weather surface", "Parking", "Community feel"),
    ),
)


FALLBACK_COACHES: tuple[CoachCandidate, ...] = (
    CoachCandidate(
        id="jack-haggerty",
        name="Jack Haggerty",
        avatar_url="/assets/images/coaches/jack-haggerty.jpg",
        rating=4.9,
        review_count=145,
        specialties=("1-to-1 Development", "Finishing", "Mentoring"),
        experience_label="12+ years",
        bio="Professional player at Glenvale FC specialising in individual development, finishing and mentoring.",
        price_per_session=75.0,
        certifications=("UEFA B License", "Youth Development Certified"),
        current_club="Glenvale FC",
        locations_served=("Lochwinnoch",),
    ),
    CoachCandidate(
        id="mairead-fulton",
        name="Mairead Fulton",
        avatar_url="/assets/images/coaches/mairead-fulton.jpg",
        rating=5.0,
        review_count=203,
        specialties=("Women & Girls", "Midfield", "Professionalism"),
        experience_label="15+ years",
        bio="Professional player at Heart of Midlothian FC focusing on midfield play and professionalism.",
        price_per_session=85.0,
        certifications=("UEFA A License", "Women's Football Specialist"),
        current_club="Heart of Midlothian FC",
        locations_served=("Glasgow South", "East Kilbride"),
    ),
    CoachCandidate(
        id="stephen-mallan",
        name="Stephen Mallan",
        avatar_url="/assets/images/coaches/stephen-mallan.jpg",
        rating=4.8,
        review_count=178,
        specialties=("Set Pieces", "Long-Range Shooting", "Midfield"),
        experience_label="10+ years",
        bio="Professional player at St Johnstone FC known for set pieces and long-range shooting.",
        price_per_session=80.0,
        certifications=("SFA Level 2", "Set Piece Specialist"),
        current_club="St Johnstone FC",
        locations_served=("Lochwinnoch", "Airdrie"),
    ),
    CoachCandidate(
        id="katie-lockwood",
        name="Katie Lockwood",
        avatar_url="/assets/images/coaches/katie-lockwood.jpg",
        rating=4.9,
        review_count=167,
        specialties=("Attacking", "Finishing", "Pressing"),
        experience_label="8+ years",
        bio="Professional player at Glasgow City FC coaching finishing and high-pressing systems.",
        price_per_session=85.0,
        certifications=("UEFA B License", "Tactical Analysis Certified"),
        current_club="Glasgow City FC",
        locations_served=("East Kilbride", "Glasgow South"),
    ),
    CoachCandidate(
        id="aidan-nesbitt",
        name="Aidan Nesbitt",
        avatar_url="/assets/images/coaches/aidan-nesbitt.jpg",
        rating=4.7,
        review_count=134,
        specialties=("Creativity", "First Touch", "Final Third"),
        experience_label="7+ years",
        bio="Professional player at Falkirk FC working on creative play, first touch and final-third decisions.",
        price_per_session=78.0,
        certifications=("SFA Level 1", "Creative Play Specialist"),
        current_club="Falkirk FC",
        locations_served=("East Kilbride",),
    ),
    CoachCandidate(
        id="malcolm-mclean",
        name="Malcolm McLean",
        avatar_url="/assets/images/coaches/malcolm-mclean.jpg",
        rating=4.8,
        review_count=189,
        specialties=("Youth Pathways", "Session Design", "Academy Methodology"),
        experience_label="14+ years",
        bio="Full-time coach running academy-level session design and youth pathways.",
        price_per_session=80.0,
        certifications=("UEFA A License", "Academy Methodology Certified"),
        current_club="Empire Performance",
        locations_served=("Airdrie", "East Kilbride"),
    ),
    CoachCandidate(
        id="benji-wright",
        name="Benji Wright",
        avatar_url="/assets/images/coaches/benji-wright.jpg",
        rating=4.6,
        review_count=98,
        specialties=("Physical Development", "Conditioning", "Speed/Agility"),
        experience_label="6+ years",
        bio="Professional player at Cumnock Juniors covering conditioning, speed and agility.",
        price_per_session=75.0,
        certifications=("SFA Level 1", "Conditioning Specialist"),
        current_club="Cumnock Juniors",
        locations_served=("Airdrie",),
    ),
    CoachCandidate(
        id="fraser-mcfadzean",
        name="Fraser McFadzean",
        avatar_url="/assets/images/coaches/fraser-mcfadzean.jpg",
        rating=4.7,
        review_count=112,
        specialties=("Ball Mastery", "Technical Foundations", "Youth Development"),
        experience_label="9+ years",
        bio="Professional player at Glenvale FC building ball mastery and technical foundations.",
        price_per_session=78.0,
        certifications=("UEFA B License", "Technical Skills Certified"),
        current_club="Glenvale FC",
        locations_served=("Lochwinnoch", "Glasgow South"),
    ),
)


SPECIALTIES: tuple[str, ...] = (
    "all",
    "1-to-1 Development",
    "Finishing",
    "Mentoring",
    "Youth Pathways",
    "Session Design",
    "Academy Methodology",
    "Women & Girls",
    "Midfield",
    "Professionalism",
    "Attacking",
    "Pressing",
    "Set Pieces",
    "Long-Range Shooting",
    "Creativity",
    "First Touch",
    "Final Third",
    "Physical Development",
    "Conditioning",
    "Speed/Agility",
    "Youth Development",
    "Technical Foundations",
    "Ball Mastery",
)
