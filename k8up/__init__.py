"""Resources, status conditions and a tar.gz writer for backup, restore, archive, check and prune jobs."""

__version__ = "2.0.0"