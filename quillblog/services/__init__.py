from quillblog.services.authorization import Action, authorize
from quillblog.services.blog import BlogResult, BlogService, VisibilityPolicy
from quillblog.services.categories import CategoryRegistry, CategoryResolution, ResolutionOutcome
from quillblog.services.media import MediaService
from quillblog.services.validation import validate_create, validate_update

__all__ = [
    "Action",
    "BlogResult",
    "BlogService",
    "CategoryRegistry",
    "CategoryResolution",
    "MediaService",
    "ResolutionOutcome",
    "VisibilityPolicy",
    "authorize",
    "validate_create",
    "validate_update",
]
