from typing import List

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_movie_use_case import CreateMovieUseCase
from src.service.cinema.app.command.delete_entity_use_case import DeleteEntityUseCase
from src.service.cinema.app.command.update_movie_use_case import UpdateMovieUseCase
from src.service.cinema.app.query.movie_query_use_case import MovieQueryUseCase
from src.service.cinema.driving_adapter.http_controller.auth.principal_auth import (
    require_principal,
)
from src.service.cinema.driving_adapter.http_controller.schema.movie_schema import (
    MovieDetailsRequest,
    MovieRequest,
    MovieResponse,
    PatchMovieRequest,
)


router = APIRouter(dependencies=[Depends(require_principal)])


@router.get('/by-title', status_code=status.HTTP_200_OK)
@Logger.io
async def find_movie_by_title(
    title: str = Query(..., min_length=1),
    use_case: MovieQueryUseCase = Depends(MovieQueryUseCase.depends),
) -> MovieResponse:
    movie = await use_case.find_movie_by_title(title=title)
    return MovieResponse.model_validate(movie, from_attributes=True)


@router.put('/by-title', status_code=status.HTTP_200_OK)
@Logger.io
async def update_movie_by_title(
    request: MovieDetailsRequest,
    title: str = Query(..., min_length=1),
    use_case: UpdateMovieUseCase = Depends(UpdateMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.update_movie_by_title(
        title=title,
        genre=request.genre,
        duration_minutes=request.duration_minutes,
        release_date=request.release_date,
    )
    return MovieResponse.model_validate(movie, from_attributes=True)


@router.delete('/by-title', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_movie_by_title(
    title: str = Query(..., min_length=1),
    use_case: DeleteEntityUseCase = Depends(DeleteEntityUseCase.depends),
) -> None:
    await use_case.delete_movie_by_title(title=title)


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_movies(
    use_case: MovieQueryUseCase = Depends(MovieQueryUseCase.depends),
) -> List[MovieResponse]:
    movies = await use_case.list_movies()
    return [MovieResponse.model_validate(movie, from_attributes=True) for movie in movies]


@router.get('/{movie_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_movie(
    movie_id: int,
    use_case: MovieQueryUseCase = Depends(MovieQueryUseCase.depends),
) -> MovieResponse:
    movie = await use_case.get_movie(movie_id=movie_id)
    return MovieResponse.model_validate(movie, from_attributes=True)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_movie(
    request: MovieRequest,
    use_case: CreateMovieUseCase = Depends(CreateMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.create_movie(
        title=request.title,
        genre=request.genre,
        duration_minutes=request.duration_minutes,
        release_date=request.release_date,
    )
    return MovieResponse.model_validate(movie, from_attributes=True)


@router.put('/{movie_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_movie(
    movie_id: int,
    request: MovieRequest,
    use_case: UpdateMovieUseCase = Depends(UpdateMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.update_movie(
        movie_id=movie_id,
        title=request.title,
        genre=request.genre,
        duration_minutes=request.duration_minutes,
        release_date=request.release_date,
    )
    return MovieResponse.model_validate(movie, from_attributes=True)


@router.patch('/{movie_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def patch_movie(
    movie_id: int,
    request: PatchMovieRequest,
    use_case: UpdateMovieUseCase = Depends(UpdateMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.patch_movie(movie_id=movie_id, **request.changes())
    return MovieResponse.model_validate(movie, from_attributes=True)


@router.delete('/{movie_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_movie(
    movie_id: int,
    use_case: DeleteEntityUseCase = Depends(DeleteEntityUseCase.depends),
) -> None:
    await use_case.delete_movie(movie_id=movie_id)
