"""
Static portal content.

The fixed texts shown by the portal screens: the sidebar progress steps,
the support types a customer can ask for, the issue checklist and the
generic troubleshooting guidance shown on the resolution screen.
"""

from ..state.models import SupportOption

# (id, label, description) in display order
WORKFLOW_STEPS = [
    ("1", "Start Process", "Initialize your claim"),
    ("2", "Upload Invoice", "Provide proof of purchase"),
    ("3", "Select Products", "Choose affected items"),
    ("4", "Describe Issues", "Tell us what's wrong"),
    ("5", "Resolution", "Get your solution"),
]

SUPPORT_TYPES = [
    SupportOption(
        id="general",
        label="General Question",
        description="Basic inquiries about your product",
    ),
    SupportOption(
        id="troubleshooting",
        label="Troubleshooting",
        description="Technical issues or problems",
    ),
    SupportOption(
        id="warranty",
        label="Warranty Claim",
        description="Product defects or warranty issues",
    ),
]

ISSUES = [
    "Battery not charging properly",
    "Screen flickering or display issues",
    "Keyboard keys unresponsive",
    "Unexpected shutdowns or restarts",
    "Wi-Fi or connectivity problems",
]

TROUBLESHOOTING_GUIDANCE = (
    "Check the charging cable and adapter for damage and ensure they are "
    "properly connected, reset the System Management Controller (SMC) to "
    "resolve battery and power-related issues, update macOS to the latest "
    "version to fix potential software bugs causing shutdowns, run Apple "
    "Diagnostics to check for hardware problems."
)


def support_type_ids() -> set[str]:
    return {option.id for option in SUPPORT_TYPES}
