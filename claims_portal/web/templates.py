"""Template name constants."""


class Template:
    PORTAL = "portal"
