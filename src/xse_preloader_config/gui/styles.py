"""Theme and style constants for the GUI.

All GUI components should reference these constants to maintain consistent styling.

Constants:
    COLORS: Color palette for buttons, text, and UI elements
    FONTS: Font family, size, and weight configurations
    PADDING: Spacing values for margins and padding
    WINDOW_SIZES: Default and minimum window dimensions
"""

# Color palette - semantic color names for consistent theming
COLORS = {
    "success": "#2d8a4e",        # Allowed processes (green)
    "danger": "#dc3545",         # Denied processes, remove buttons (red)
    "danger_hover": "#a71d2a",
    "toolbar": ("#3d3d3d", "#1a1a1a"),
}

# Font configurations - tuple format: (family, size, weight)
FONTS = {
    "title": ("Segoe UI", 18, "bold"),
    "heading": ("Segoe UI", 14, "bold"),
    "body": ("Segoe UI", 12),
    "small": ("Segoe UI", 10),
}

# Padding and spacing values in pixels
PADDING = {
    "small": 10,
    "medium": 18,
    "large": 30,
}

# Window sizes - tuple format: (width, height)
WINDOW_SIZES = {
    "main": (820, 680),
    "process_dialog": (460, 300),
    "min_main": (640, 480),
}
