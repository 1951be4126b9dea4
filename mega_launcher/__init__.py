"""Container entrypoint for the aries service.

Sets MEGA_BASE_DIR, probes for the optional config file, and replaces the
current process with /usr/local/bin/aries.
"""
