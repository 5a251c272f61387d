"""
Shared constants for admin panel components
"""

# ===== RESPONSIVE LAYOUT CONSTANTS =====
BREAKPOINT = 800  # Mobile vs Desktop threshold (px)

# Grid settings for desktop
DESKTOP_COLUMNS = 3

# Grid spacing
GRID_SPACING = 10
GRID_RUN_SPACING = 10

ACCENT = "#D97706"  # amber

# Status badge colors (background, text)
STATUS_COLORS = {
    "pending": ("amber100", "amber900"),
    "preparing": ("blue100", "blue900"),
    "served": ("green100", "green900"),
}

STATUS_FILTERS = ["all", "pending", "preparing", "served"]
