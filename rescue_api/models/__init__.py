from .location import Location
from .company import Company
from .shift import Shift
from .team_type import TeamType
from .roster import Member, Vehicle, Resource
from .team import Team

# все модели должны быть импортированы здесь, чтобы Base.metadata их видел
