from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from forum.api import deps
from forum.models.user import User
from forum.schemas.thread import ThreadEnvelope, ThreadList, THREAD_WRITE_OPENAPI
from forum.services.guards import (
    ThreadContext,
    run_guards,
    SHOW_GUARDS,
    CREATE_GUARDS,
    UPDATE_GUARDS,
    DELETE_GUARDS,
)
from forum.services.thread import (
    create_thread,
    list_threads,
    update_thread,
    delete_thread,
)

router = APIRouter(prefix="/threads", tags=["threads"])

# Path ids and bodies are taken raw: parsing them is a guard step, so that a
# malformed id or payload never outranks the authentication check (401).


@router.get("", response_model=ThreadList, summary="List threads",
            description="All threads in creation order. No authentication required.")
async def list_threads_route(session: AsyncSession = Depends(deps.get_db)):
    return {"threads": await list_threads(session)}


@router.get("/{thread_id}", response_model=ThreadEnvelope, summary="Get a thread")
async def get_thread_route(thread_id: str, session: AsyncSession = Depends(deps.get_db)):
    ctx = await run_guards(ThreadContext(session, thread_id=thread_id), SHOW_GUARDS)
    return {"thread": ctx.thread}


@router.post("", response_model=ThreadEnvelope, status_code=status.HTTP_200_OK,
             summary="Create a thread",
             openapi_extra=THREAD_WRITE_OPENAPI,
             description="The authenticated caller becomes the owner.")
async def create_thread_route(
    request: Request,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User | None = Depends(deps.get_current_user),
):
    ctx = ThreadContext(session, identity=current_user, payload=await request.body())
    await run_guards(ctx, CREATE_GUARDS)
    thread = await create_thread(session, user_id=ctx.user.id, fields=ctx.fields)
    await session.commit()
    return {"thread": thread}


@router.put("/{thread_id}", response_model=ThreadEnvelope, summary="Update a thread",
            openapi_extra=THREAD_WRITE_OPENAPI,
            description="Owner only. Fields left out of the payload keep their value.")
async def update_thread_route(
    thread_id: str,
    request: Request,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User | None = Depends(deps.get_current_user),
):
    ctx = ThreadContext(session, identity=current_user, thread_id=thread_id, payload=await request.body())
    await run_guards(ctx, UPDATE_GUARDS)
    thread = ctx.loaded_thread
    thread = await update_thread(session, thread.id, ctx.fields, thread=thread)
    await session.commit()
    return {"thread": thread}


@router.delete("/{thread_id}", status_code=status.HTTP_204_NO_CONTENT,
               summary="Delete a thread", description="Owner only. Permanent.")
async def delete_thread_route(
    thread_id: str,
    session: AsyncSession = Depends(deps.get_db),
    current_user: User | None = Depends(deps.get_current_user),
):
    ctx = ThreadContext(session, identity=current_user, thread_id=thread_id)
    await run_guards(ctx, DELETE_GUARDS)
    thread = ctx.loaded_thread
    await delete_thread(session, thread.id, thread=thread)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
