from charity_api.models.contact_submission import ContactSubmission
from charity_api.models.donation import Donation
from charity_api.models.event import Event
from charity_api.models.event_content import (
    EventAgendaItem,
    EventGalleryImage,
    EventImpactMetric,
    EventTestimonial,
)
from charity_api.models.event_registration import EventRegistration
from charity_api.models.media_asset import MediaAsset
from charity_api.models.newsletter_subscription import NewsletterSubscription
from charity_api.models.project import Project
from charity_api.models.user import User
from charity_api.models.volunteer import Volunteer

__all__ = [
    "ContactSubmission",
    "Donation",
    "Event",
    "EventAgendaItem",
    "EventGalleryImage",
    "EventImpactMetric",
    "EventRegistration",
    "EventTestimonial",
    "MediaAsset",
    "NewsletterSubscription",
    "Project",
    "User",
    "Volunteer",
]
