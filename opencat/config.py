# centralized configuration loader
# values come from the environment (or a .env file); client arguments override them

import os
from dotenv import load_dotenv

load_dotenv()

# Gateway
BASE_URL = os.getenv("OPENCAT_BASE_URL", "https://api.opencat.app")
TOKEN = os.getenv("OPENCAT_TOKEN")
USER_AGENT = os.getenv("OPENCAT_USER_AGENT", "OpenCat/424 CFNetwork/1490.0.4 Darwin/23.2.0")

# Timeouts (seconds)
REQUEST_TIMEOUT = float(os.getenv("OPENCAT_TIMEOUT", "120"))
CONNECT_TIMEOUT = float(os.getenv("OPENCAT_CONNECT_TIMEOUT", "10"))

# Azure speech
AZURE_OUTPUT_FORMAT = os.getenv("OPENCAT_AZURE_OUTPUT_FORMAT", "audio-16khz-128kbitrate-mono-mp3")
AZURE_REGION = os.getenv("OPENCAT_AZURE_REGION", "eastasia")

# Paths
CHAT_PATH = "/1/chat"
CLAUDE_COMPLETE_PATH = "/v1/complete"
IMAGE_PATH = "/1/images/generations"
SPEECH_PATH = "/v1/audio/speech"
AZURE_SPEECH_PATH = "/cognitiveservices/v1"
USAGE_PATH = "/1.1/me/usage"
