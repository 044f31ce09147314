# Utils package for Digistore backend

from .logging_utils import mask_value


__all__ = ["mask_value"]
