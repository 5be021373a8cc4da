"""Privacy checklist for a social-profile URL (static template, no profile is fetched)."""

from typing import Optional

# token(s) in URL -> (issues, recommendations) for the visibility category
PLATFORM_VISIBILITY = (
    (
        ("facebook", "fb.com"),
        ["Friends list is public", "Posts are visible to everyone"],
        ["Change post privacy to Friends", "Hide friends list"],
    ),
    (
        ("github",),
        ["Email address is public", "Organization membership is visible"],
        ["Hide your email in settings", "Keep organization memberships private"],
    ),
)


def _default_categories() -> list:
    return [
        {
            "id": "visibility",
            "title": "Profile Visibility",
            "icon": "⚠️",
            "status": "warning",
            "issues": ["Profile is public", "Location sharing enabled"],
            "recommendations": ["Set profile to private", "Disable location sharing"],
        },
        {
            "id": "contact",
            "title": "Contact Information",
            "icon": "✓",
            "status": "safe",
            "issues": [],
            "recommendations": ["Keep current settings"],
        },
        {
            "id": "tracking",
            "title": "Activity Tracking",
            "icon": "⚠️",
            "status": "warning",
            "issues": ["Activity status visible", "Online status shown"],
            "recommendations": ["Hide activity status", "Disable online indicators"],
        },
    ]


def analyze_privacy(url: Optional[str]) -> dict:
    categories = _default_categories()
    url = url or ""

    for tokens, issues, recommendations in PLATFORM_VISIBILITY:
        if any(t in url for t in tokens):
            categories[0]["issues"] = list(issues)
            categories[0]["recommendations"] = list(recommendations)
            break

    return {"categories": categories}
