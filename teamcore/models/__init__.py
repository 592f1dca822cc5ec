from .team import Team
from .user import User
from .collection import Collection
from .document import Document
