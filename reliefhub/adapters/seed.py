"""
Curated default dataset for ReliefHub.

These records back the official sources that have no live integration,
replace an empty official-updates aggregation, and terminate the social
feed chain. Timestamps are relative to the `now` passed in, so the data
always looks recent and tests can pin it.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List
from reliefhub.core.models import RawReport, Update

OFFICIAL_UPDATES: List[Dict[str, Any]] = [
    {
        "id": "1",
        "source": "FEMA",
        "title": "Emergency Shelter Locations Updated",
        "content": "New emergency shelters have been opened in Manhattan and Brooklyn. Capacity for 500+ people available.",
        "url": "https://fema.gov/disaster-updates",
        "age": timedelta(hours=4),
        "severity": "high",
        "category": "shelter",
        "contact": "1-800-621-3362",
    },
    {
        "id": "2",
        "source": "NYC Emergency Management",
        "title": "Water Distribution Points Active",
        "content": "Water distribution is now active at Central Park and Prospect Park locations from 8 AM to 6 PM.",
        "url": "https://nyc.gov/emergency",
        "age": timedelta(hours=2),
        "severity": "medium",
        "category": "supplies",
        "contact": "311",
    },
    {
        "id": "3",
        "source": "Red Cross",
        "title": "Volunteer Registration Open",
        "content": "Red Cross is accepting volunteer registrations for disaster relief efforts. Training provided.",
        "url": "https://redcross.org/volunteer",
        "age": timedelta(hours=1),
        "severity": "low",
        "category": "volunteer",
        "contact": "1-800-733-2767",
    },
    {
        "id": "4",
        "source": "National Weather Service",
        "title": "Severe Weather Alert Extended",
        "content": "Severe weather conditions expected to continue through tomorrow evening. Stay indoors.",
        "url": "https://weather.gov/alerts",
        "age": timedelta(minutes=30),
        "severity": "high",
        "category": "weather",
        "contact": "weather.gov",
    },
    {
        "id": "5",
        "source": "Salvation Army",
        "title": "Mobile Food Units Deployed",
        "content": "Mobile food units are serving hot meals in affected areas. Check locations on our website.",
        "url": "https://salvationarmy.org/disaster-relief",
        "age": timedelta(hours=6),
        "severity": "medium",
        "category": "food",
        "contact": "1-800-725-2769",
    },
]

SOCIAL_REPORTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "post": "#floodrelief Need food and water in Lower Manhattan. Families stranded!",
        "user": "citizen_helper1",
        "age": timedelta(hours=2),
        "location": "Lower Manhattan, NYC",
        "hashtags": ["#floodrelief", "#emergency"],
    },
    {
        "id": "2",
        "post": "Offering shelter in Brooklyn Heights for flood victims. Contact me! #disasterhelp",
        "user": "brooklyn_resident",
        "age": timedelta(hours=1),
        "location": "Brooklyn Heights, NYC",
        "hashtags": ["#disasterhelp", "#shelter"],
    },
    {
        "id": "3",
        "post": "URGENT: Medical supplies needed at evacuation center on 42nd Street #emergencyhelp",
        "user": "medical_volunteer",
        "age": timedelta(minutes=30),
        "location": "42nd Street, NYC",
        "hashtags": ["#emergencyhelp", "#medical"],
    },
    {
        "id": "4",
        "post": "Earthquake felt in downtown area. Buildings shaking! #earthquake #help",
        "user": "downtown_witness",
        "age": timedelta(minutes=15),
        "location": "Downtown",
        "hashtags": ["#earthquake", "#help"],
    },
    {
        "id": "5",
        "post": "Fire spreading near residential area. Evacuations needed! #fire #evacuate",
        "user": "safety_alert",
        "age": timedelta(minutes=45),
        "location": "Residential District",
        "hashtags": ["#fire", "#evacuate"],
    },
    {
        "id": "6",
        "post": "Have extra blankets and warm clothes for disaster victims #donate #help",
        "user": "community_helper",
        "age": timedelta(hours=3),
        "location": "Community Center",
        "hashtags": ["#donate", "#help"],
    },
]


class CuratedDataset:
    """Seed dataset built from in-memory records"""

    def __init__(self,
                 official_updates: List[Dict[str, Any]] = OFFICIAL_UPDATES,
                 social_reports: List[Dict[str, Any]] = SOCIAL_REPORTS):
        self._updates = official_updates
        self._reports = social_reports

    def official_updates(self, now: datetime) -> List[Update]:
        return [
            Update(**{k: v for k, v in record.items() if k != "age"}, published_at=now - record["age"])
            for record in self._updates
        ]

    def social_reports(self, now: datetime) -> List[RawReport]:
        return [
            RawReport(**{k: v for k, v in record.items() if k != "age"}, timestamp=now - record["age"])
            for record in self._reports
        ]
