from .catalog import FilterVariant, ParamKey, accepted_keys, display_name, all_variants
from .errors import InstafilterError, NoSourceImage, PersistenceFailure, UnknownFilterError
from .normalize import NormalizedControls, FilterConfiguration, normalize, configure
from .filters import ImageFilter, make_filter
from .pipeline import ProcessingPipeline, apply
from .session import EditingSession, load_image, select_filter, set_control, set_intensity, save
from .helpers import EditorConfig, SaveConfig, ensure_dir, load_image_rgb, save_image_rgb, list_images
from .library import ImagePicker, ImageSaver
from .viz import Visualizer

__all__ = [
    "FilterVariant", "ParamKey", "accepted_keys", "display_name", "all_variants",
    "InstafilterError", "NoSourceImage", "PersistenceFailure", "UnknownFilterError",
    "NormalizedControls", "FilterConfiguration", "normalize", "configure",
    "ImageFilter", "make_filter",
    "ProcessingPipeline", "apply",
    "EditingSession", "load_image", "select_filter", "set_control", "set_intensity", "save",
    "EditorConfig", "SaveConfig", "ensure_dir", "load_image_rgb", "save_image_rgb", "list_images",
    "ImagePicker", "ImageSaver",
    "Visualizer",
]
