# Import all models so Base.metadata.create_all() can see them.

from cartonizer.models.carton import CartonRecord  # noqa: F401
from cartonizer.models.operator import Operator  # noqa: F401
from cartonizer.models.solution import PackingSolutionRecord  # noqa: F401
