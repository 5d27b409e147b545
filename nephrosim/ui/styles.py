"""
Centralized styles module for the NephroSim UI.

This module provides a unified theme, colors, fonts, and style builders
to ensure consistency across all UI components.
"""

# =============================================================================
# COLORS - Unified color palette
# =============================================================================

COLORS = {
    # Core UI surfaces
    'background': '#0B0F14',
    'background_alt': '#0F141C',
    'panel': '#151B24',
    'card': '#1C2431',
    'header': '#10151D',

    # Borders & Dividers
    'border': '#2A3341',
    'border_light': '#364355',

    # Text
    'text': '#E7ECF4',
    'text_secondary': '#C1CAD8',
    'text_dim': '#7E8A9C',

    # Controls
    'control': '#1A2230',
    'control_hover': '#222C3A',
    'control_pressed': '#283246',

    # Accent Colors
    'primary': '#4C86F7',
    'success': '#2FB36D',
    'warning': '#E1A644',
    'danger': '#E26D5C',
    'info': '#4BA3C7',

    # Parameter groups
    'clinical': '#35C679',
    'lab': '#9E7BC9',
    'trend': '#4BA3C7',
}

# Event log entry colors, keyed by EventType value.
EVENT_COLORS = {
    'intervention': COLORS['primary'],
    'change': COLORS['text_secondary'],
    'system': COLORS['info'],
    'critical': COLORS['danger'],
}

# Game-over dialog accent, keyed by GameStatus value.
OUTCOME_COLORS = {
    'won': COLORS['success'],
    'lost_time': COLORS['warning'],
    'lost_budget': COLORS['warning'],
    'lost_death': COLORS['danger'],
}

# =============================================================================
# FONTS
# =============================================================================

FONTS = {
    'family': 'Arial',
    'size_small': '11px',
    'size_normal': '12px',
    'size_medium': '13px',
    'size_title': '16px',
    'size_display': '20px',
    'size_numeric': '24px',
}

# =============================================================================
# STYLE BUILDERS - Functions to generate stylesheet strings
# =============================================================================

def get_base_widget_style():
    """Base style for all widgets."""
    return f"""
        QWidget {{
            background-color: {COLORS['background']};
            color: {COLORS['text']};
            font-family: {FONTS['family']};
            font-size: {FONTS['size_normal']};
        }}
        QLabel {{
            background-color: transparent;
            background: none;
            color: {COLORS['text']};
        }}
        QToolTip {{
            background-color: {COLORS['card']};
            color: {COLORS['text']};
            border: 1px solid {COLORS['border']};
            border-radius: 6px;
            padding: 6px 8px;
        }}
    """

def get_groupbox_style(accent_color=None):
    """Style for QGroupBox with optional left accent border."""
    accent = f"border-left: 4px solid {accent_color}; padding-left: 10px;" if accent_color else ""
    return f"""
        QGroupBox {{
            font-weight: 600;
            font-size: {FONTS['size_medium']};
            color: {COLORS['text']};
            border: 1px solid {COLORS['border']};
            border-radius: 10px;
            margin-top: 14px;
            padding: 10px 12px 12px 12px;
            background-color: {COLORS['card']};
            {accent}
        }}
        QGroupBox::title {{
            subcontrol-origin: margin;
            subcontrol-position: top left;
            left: 12px;
            padding: 0 6px;
            background-color: {COLORS['card']};
            color: {COLORS['text_secondary']};
        }}
    """

def get_button_style(variant="neutral", outlined=False, padding="8px 16px", radius=8, min_width=None):
    """Style for QPushButton with various variants."""
    variant_map = {
        "primary": COLORS['primary'],
        "success": COLORS['success'],
        "warning": COLORS['warning'],
        "danger": COLORS['danger'],
        "neutral": COLORS['control'],
    }
    base = variant_map.get(variant, COLORS['control'])
    is_neutral = base == COLORS['control']
    if outlined:
        text = COLORS['text'] if is_neutral else base
        background = "transparent"
        border = f"1px solid {COLORS['border_light'] if is_neutral else base}"
        hover_bg = get_rgba(base, 0.12)
    else:
        text = COLORS['text'] if is_neutral else "white"
        background = base
        border = "1px solid transparent"
        hover_bg = COLORS['control_hover'] if is_neutral else get_rgba(base, 0.9)

    min_width_rule = f"min-width: {min_width}px;" if min_width else ""

    return f"""
        QPushButton {{
            background-color: {background};
            color: {text};
            padding: {padding};
            border-radius: {radius}px;
            font-size: {FONTS['size_medium']};
            font-weight: 600;
            border: {border};
            text-align: left;
            {min_width_rule}
        }}
        QPushButton:hover {{
            background-color: {hover_bg};
        }}
        QPushButton:pressed {{
            background-color: {COLORS['control_pressed']};
        }}
        QPushButton:disabled {{
            background-color: {COLORS['background_alt']};
            color: {COLORS['text_dim']};
            border-color: {COLORS['border']};
        }}
    """

def get_list_style():
    """Style for QListWidget (event log)."""
    return f"""
        QListWidget {{
            background-color: {COLORS['panel']};
            border: 1px solid {COLORS['border']};
            border-radius: 8px;
            padding: 4px;
            font-size: {FONTS['size_normal']};
        }}
        QListWidget::item {{
            padding: 3px 4px;
            border-bottom: 1px solid {COLORS['background_alt']};
        }}
    """

def get_frame_style(bg_color=None, border_color=None, radius=8, border_width=1):
    """Style for QFrame."""
    bg = bg_color or COLORS['panel']
    bc = border_color or COLORS['border']
    return f"""
        QFrame {{
            background-color: {bg};
            border: {border_width}px solid {bc};
            border-radius: {radius}px;
        }}
    """

def get_bar_style(border_edge="bottom"):
    """Style for top/bottom bars."""
    edge = "bottom" if border_edge == "bottom" else "top"
    return f"""
        QFrame {{
            background-color: {COLORS['header']};
            border-{edge}: 1px solid {COLORS['border']};
        }}
    """

def get_dialog_style():
    """Style for QDialog."""
    return f"""
        QDialog {{
            background-color: {COLORS['background']};
            color: {COLORS['text']};
            font-family: {FONTS['family']};
        }}
        {get_groupbox_style()}
        QLabel {{
            color: {COLORS['text']};
            background: transparent;
        }}
        QPushButton {{
            background-color: {COLORS['control']};
            color: {COLORS['text']};
            border: 1px solid {COLORS['border']};
            border-radius: 8px;
            padding: 8px 18px;
            font-size: {FONTS['size_medium']};
            font-weight: 600;
            min-width: 80px;
        }}
        QPushButton:hover {{
            background-color: {COLORS['control_hover']};
            border-color: {COLORS['border_light']};
        }}
    """

# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def hex_to_rgb(hex_color):
    """Convert hex color to r, g, b string for rgba()."""
    hex_color = hex_color.lstrip('#')
    r, g, b = tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    return f"{r}, {g}, {b}"

def get_rgba(hex_color, alpha):
    """Get rgba string from hex color and alpha value (0-1)."""
    return f"rgba({hex_to_rgb(hex_color)}, {alpha})"
