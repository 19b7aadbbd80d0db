ALLOWED_DOCKER_SUBCOMMANDS: frozenset[str] = frozenset(
    {
        # Container lifecycle and inspection
        "ps",
        "exec",
        "logs",
        "inspect",
        "stats",
        "start",
        "stop",
        "restart",
        "rm",
        "cp",
        # Disk maintenance (listing and pruning images, volumes, networks, build cache)
        "images",
        "image",
        "volume",
        "network",
        "system",
        "builder",
    }
)

# Subcommands whose last positional argument is the target container
DOCKER_CONTAINER_ACTIONS: frozenset[str] = frozenset(
    {"start", "stop", "restart", "rm", "logs", "inspect", "stats"}
)

# pg_dump may only write below these directories
BACKUP_OUTPUT_ROOTS: tuple[str, ...] = ("/var/backups", "/tmp")

TAR_ARCHIVE_ROOTS: tuple[str, ...] = ("/var/backups", "/tmp")
TAR_SOURCE_ROOTS: tuple[str, ...] = (
    "/var/www",
    "/var/backups",
    "/tmp",
    "/vps-panel-source",
    "/root/vps-panel",
)

TAR_MODES: frozenset[str] = frozenset({"c", "x"})
