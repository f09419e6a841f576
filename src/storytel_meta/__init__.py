# ABOUTME: storytel_meta normalizes Storytel catalog titles and searches the catalog.
# ABOUTME: See storytel_meta.metadata for the provider and storytel_meta.cli for the CLI.
