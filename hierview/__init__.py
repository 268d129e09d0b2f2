"""
Hierview - модель панели иерархии сущностей.

Основные модули:
- hierarchy - плоский снимок дерева и видимость узлов
- selection - выделение нескольких сущностей (click / ctrl / shift)
- controller - проход панели без привязки к UI
- thumbnails - кэш уменьшенных изображений
"""

from .entity import Entity
from .graph import EntityGraph, GraphSource, guess_entity_name
from .expanded import ExpandedState
from .filter import NameFilter
from .hierarchy import HierarchyElement, HierarchyStructure
from .selection import SelectedEntities, SelectionMode
from .controller import HierarchyController, HierarchyRow
from .thumbnails import RescaledImageInfo, ScaledImageCache

__version__ = '0.1.0'

__all__ = [
    'Entity',
    'EntityGraph',
    'GraphSource',
    'guess_entity_name',
    'ExpandedState',
    'NameFilter',
    'HierarchyElement',
    'HierarchyStructure',
    'SelectedEntities',
    'SelectionMode',
    'HierarchyController',
    'HierarchyRow',
    'RescaledImageInfo',
    'ScaledImageCache',
]
