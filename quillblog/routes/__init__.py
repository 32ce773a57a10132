from quillblog.routes.blog import router as blog_router
from quillblog.routes.category import router as category_router
from quillblog.routes.user import router as user_router

__all__ = [
    "blog_router",
    "category_router",
    "user_router",
]
