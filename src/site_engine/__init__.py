# Site Engine
"""
Static site generation and publishing modules:
- content: front matter parsing, Markdown rendering, post loading
- template_engine: Jinja2 page templates and the footer / open-graph components
- og_image: Pillow rasterizer for open-graph preview images
- publisher: site builder, bucket uploader, preview server and CLI
"""
