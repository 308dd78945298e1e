"""
HTTP operation clients.

Each client wraps one family of endpoints. Clients are configured through
fluent setters or call arguments and perform exactly one HTTP round-trip per
terminal call (``chat``, ``complete``, ``embed``, ``create``, ``list``, ...).
"""

from openai_tools.services.audio import Audio
from openai_tools.services.batches import Batches
from openai_tools.services.chat import ChatCompletion
from openai_tools.services.conversations import Conversations
from openai_tools.services.embeddings import Embedding
from openai_tools.services.files import Files
from openai_tools.services.fine_tuning import FineTuning
from openai_tools.services.images import Images
from openai_tools.services.models import Models
from openai_tools.services.moderations import Moderations
from openai_tools.services.responses import Responses

__all__ = [
    "Audio",
    "Batches",
    "ChatCompletion",
    "Conversations",
    "Embedding",
    "Files",
    "FineTuning",
    "Images",
    "Models",
    "Moderations",
    "Responses",
]
