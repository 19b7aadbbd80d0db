from shellguard.operations.disk import safe_df as safe_df, safe_du as safe_du
from shellguard.operations.docker import (
    safe_docker_container as safe_docker_container,
    safe_docker_exec as safe_docker_exec,
    safe_docker_exec_in as safe_docker_exec_in,
)
from shellguard.operations.pg_dump import safe_pg_dump as safe_pg_dump
from shellguard.operations.tar import safe_tar as safe_tar
