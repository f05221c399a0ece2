from typing import Annotated

from fastapi import Depends, Request

from braindump.core.lifecycle import StorageRuntime


def get_runtime(request: Request) -> StorageRuntime:
    return request.app.state.runtime


RuntimeDep = Annotated[StorageRuntime, Depends(get_runtime)]
