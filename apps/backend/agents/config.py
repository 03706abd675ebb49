"""
Configuration settings for the agents package.
"""

import os

################################
# Model Configuration
################################

#==============================================================================
# VIBE CLASSIFICATION MODELS
#==============================================================================

# Backends are tried in this priority order; credentials decide which one runs.
# Aliases resolve through agents.ai.clients.MODELS
VIBE_PRIMARY_MODEL = os.getenv('VIBE_PRIMARY_MODEL', 'gemini-3-flash-preview')
VIBE_SECONDARY_MODEL = os.getenv('VIBE_SECONDARY_MODEL', 'gpt-3.5-turbo')
VIBE_TEMPERATURE = float(os.getenv('VIBE_TEMPERATURE', '0.7'))

VIBE_SYSTEM_PROMPT = "You are a design expert focused on UI/UX aesthetics."

#==============================================================================
# PAGE RENDERING
#==============================================================================

# "playwright" renders with headless Chromium; "static" fetches raw HTML only
PAGE_RENDERER = os.getenv('PAGE_RENDERER', 'playwright').lower()

RENDER_TIMEOUT_MS = int(os.getenv('RENDER_TIMEOUT_MS', '60000'))
# Buffer after DOMContentLoaded so JS-applied styles land
RENDER_SETTLE_MS = int(os.getenv('RENDER_SETTLE_MS', '2000'))
RENDER_VIEWPORT = {"width": 1440, "height": 900}
RENDER_USER_AGENT = os.getenv(
    'RENDER_USER_AGENT',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36'
)
BROWSER_LAUNCH_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',  # critical for docker/render
    '--disable-gpu',
]

STATIC_FETCH_TIMEOUT_S = float(os.getenv('STATIC_FETCH_TIMEOUT_S', '15'))

#==============================================================================
# SIGNAL EXTRACTION
#==============================================================================

MAX_PALETTE_COLORS = 8
CONTENT_EXCERPT_LIMIT = 500

#==============================================================================
# SERVER
#==============================================================================

SERVER_HOST = os.getenv('HOST', '0.0.0.0')
SERVER_PORT = int(os.getenv('PORT', '3001'))
CORS_ALLOW_ORIGINS = [o.strip() for o in os.getenv('CORS_ALLOW_ORIGINS', '*').split(',') if o.strip()]
