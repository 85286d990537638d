"""
Business logic services.

Services handle the application logic between API and database
(and between API and the external weather / text providers).
"""
from app.services import location_service
from app.services import favorite_service
from app.services import history_service
from app.services import lookup_service
