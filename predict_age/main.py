"""Entry point to the application as a Typer CLI."""

import json
from pathlib import Path
from typing import Annotated

import typer
from fastapi import FastAPI
from loguru import logger
from typer import Typer

from predict_age.configuration import config
from predict_age.predictor import AgePredictor

app = Typer(no_args_is_help=True)

description = """
**Predict Age** estimates the age of a text's author from the words they use.

The estimate is a linear model over a weighted lexicon: the intercept plus
the relative frequency of every matched term multiplied by its weight.
"""


def create_app(predictor: AgePredictor | None = None) -> FastAPI:
    """
    Create the FastAPI application sharing the Web API.

    Args:
        predictor (AgePredictor | None, optional): Predictor serving requests.
            Defaults to the predictor using the configured lexicon.

    Returns:
        FastAPI: The application.
    """
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import RedirectResponse

    from predict_age.api.router import lifespan
    from predict_age.api.router import router as main_router

    fastapi_app = FastAPI(
        title=config.project_name,
        summary="Predict Age estimates the age of a text's author.",
        description=description,
        lifespan=lifespan,
        docs_url="/v1/docs",
        openapi_url="/v1/openapi.json",
        redoc_url="/v1/redoc",
    )
    fastapi_app.state.predictor = predictor
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @fastapi_app.get("/")
    async def root() -> RedirectResponse:
        """Redirect root to docs."""
        return RedirectResponse(url="/v1/docs")

    fastapi_app.include_router(main_router, prefix="/v1")
    return fastapi_app


@app.command("api")
def run_api() -> None:
    """Start up the backend sharing the Web API."""
    import uvicorn

    uvicorn.run(create_app(), host=config.api_host, port=config.api_port)


def _parse_sizes(value: str) -> list[int]:
    try:
        return [int(size) for size in value.split(",") if size.strip()]
    except ValueError as e:
        raise typer.BadParameter(
            f"Expected comma-separated integers, got {value!r}."
        ) from e


@app.command("predict")
def predict(  # noqa: PLR0913
    text: Annotated[str | None, typer.Argument(help="Text to be assessed.")] = None,
    file: Annotated[
        Path | None, typer.Option(help="Read the text from a file instead.")
    ] = None,
    output: Annotated[str, typer.Option(help="lex, matches or full.")] = "lex",
    n_grams: Annotated[
        str, typer.Option(help="Comma-separated n-gram sizes, 0 to disable.")
    ] = "2,3",
    locale: Annotated[str, typer.Option(help="GB rewrites British spelling.")] = "US",
    places: Annotated[int, typer.Option(help="Decimal places.")] = (
        config.default_places
    ),
    sort_by: Annotated[str, typer.Option(help="lex, freq or weight.")] = "freq",
    sort_order: Annotated[str, typer.Option(help="desc or asc.")] = "desc",
    encoding: Annotated[str, typer.Option(help="freq or binary.")] = "freq",
    min_weight: Annotated[
        float | None, typer.Option("--min", help="The lowest weight considered.")
    ] = None,
    max_weight: Annotated[
        float | None, typer.Option("--max", help="The highest weight considered.")
    ] = None,
    no_int: Annotated[bool, typer.Option(help="Suppress the intercept.")] = False,
    wc_grams: Annotated[
        bool, typer.Option(help="Count n-grams as words.")
    ] = False,
    logs: Annotated[int, typer.Option(help="Verbosity from 0 to 3.")] = 2,
) -> None:
    """Predict the age of the author of a text and print it as JSON."""
    if file is not None:
        text = file.read_text(encoding="utf-8")
    if text is None:
        raise typer.BadParameter("Provide a text or --file.")

    predictor = AgePredictor()
    result = predictor.predict(
        text,
        {
            "output": output,
            "n_grams": _parse_sizes(n_grams),
            "locale": locale,
            "places": places,
            "sort_by": sort_by,
            "sort_order": sort_order,
            "encoding": encoding,
            "min": min_weight,
            "max": max_weight,
            "no_int": no_int,
            "wc_grams": wc_grams,
            "logs": logs,
        },
    )
    if result is None:
        logger.warning("No age could be predicted from the text.")
        typer.echo(json.dumps(None))
        raise typer.Exit(code=1)
    typer.echo(result.model_dump_json(indent=2))


if __name__ == "__main__":
    app()
