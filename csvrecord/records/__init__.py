"""Record marshalling package for csvrecord."""

from .marshaller import load_object, load_objects, save_object, save_objects
from .files import load_object_file, load_objects_file, save_object_file, save_objects_file

__all__ = [
    'load_object', 'load_objects', 'save_object', 'save_objects',
    'load_object_file', 'load_objects_file', 'save_object_file', 'save_objects_file',
]
