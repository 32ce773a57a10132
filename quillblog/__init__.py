"""QuillBlog backend package."""
