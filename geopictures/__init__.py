from .analytic import AnalyticException, Circle, Line, Point
from .configuration import (
    Configuration,
    ConfigurationError,
    ConfigurationObject,
    ConfigurationObjectType,
    ConstructedConfigurationObject,
    LooseConfigurationObject,
    LooseObjectLayout,
    loose_line,
    loose_point,
)
from .constructions import PredefinedConstructionType, construct_analytic_object
from .picture import Picture, PicturesOfConfiguration
from .geometric_objects import (
    CircleObject,
    DefinableByPoints,
    GeometricObject,
    GeometricObjectKind,
    LineObject,
    PointObject,
)
from .contextual_picture import ContextualPicture, ObjectsFilter, create_contextual_picture
from .constructor import ConstructionData, GeometryConstructor
from .config import ConstructorSettings, get_constructor_settings, set_constructor_settings
from .metrics import ConstructionMetrics
from .exceptions import (
    ConstructorError,
    GeometryConstructionException,
    InconsistentCollinearityException,
    InconsistentConcyclityException,
    InconsistentEqualityException,
    InconsistentIncidenceException,
    InconsistentPicturesException,
    InconstructibleContextualPicture,
)

__all__ = [
    'AnalyticException',
    'Circle',
    'Line',
    'Point',
    'Configuration',
    'ConfigurationError',
    'ConfigurationObject',
    'ConfigurationObjectType',
    'ConstructedConfigurationObject',
    'LooseConfigurationObject',
    'LooseObjectLayout',
    'loose_line',
    'loose_point',
    'PredefinedConstructionType',
    'construct_analytic_object',
    'Picture',
    'PicturesOfConfiguration',
    'CircleObject',
    'DefinableByPoints',
    'GeometricObject',
    'GeometricObjectKind',
    'LineObject',
    'PointObject',
    'ContextualPicture',
    'ObjectsFilter',
    'create_contextual_picture',
    'ConstructionData',
    'GeometryConstructor',
    'ConstructorSettings',
    'get_constructor_settings',
    'set_constructor_settings',
    'ConstructionMetrics',
    'ConstructorError',
    'GeometryConstructionException',
    'InconsistentCollinearityException',
    'InconsistentConcyclityException',
    'InconsistentEqualityException',
    'InconsistentIncidenceException',
    'InconsistentPicturesException',
    'InconstructibleContextualPicture',
]
