"""Example pipeline: extend a triangle by its midpoints and inspect the incidence graph."""

import logging

import numpy as np

from geopictures import (
    Configuration,
    ConstructionMetrics,
    ConstructorSettings,
    GeometryConstructor,
    LooseObjectLayout,
    ObjectsFilter,
    PredefinedConstructionType as T,
    loose_point,
)


def _report(contextual_picture, new_object) -> None:
    print(f"\nAfter adding {new_object!r}:")
    for line in contextual_picture.lines(ObjectsFilter.NEW):
        names = ", ".join(str(point) for point in contextual_picture.points_of(line))
        print(f"  new line through {names}")
    for circle in contextual_picture.circles(ObjectsFilter.NEW):
        names = ", ".join(str(point) for point in contextual_picture.points_of(circle))
        print(f"  new circle through {names}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    A, B, C = loose_point("A"), loose_point("B"), loose_point("C")
    D = T.MIDPOINT(B, C, name="D")
    E = T.MIDPOINT(C, A, name="E")
    F = T.MIDPOINT(A, B, name="F")
    nine_point_circle = T.CIRCUMCIRCLE(D, E, F, name="w")

    configuration = Configuration(LooseObjectLayout.TRIANGLE, [A, B, C])
    constructor = GeometryConstructor(ConstructorSettings(number_of_pictures=5), rng=np.random.default_rng(123))
    metrics = ConstructionMetrics()

    contextual_picture, data = constructor.construct_contextual_picture(configuration, metrics)
    if not data.successful:
        print("Triangle failed:", data.describe())
        return

    for new_object in (D, E, F, nine_point_circle):
        configuration = configuration.derive(new_object)
        contextual_picture, data = constructor.construct_contextual_picture_by_cloning(
            contextual_picture, configuration, metrics
        )
        if not data.successful:
            print(f"{new_object} failed:", data.describe())
            return
        _report(contextual_picture, new_object)

    print("\nMetrics:", metrics.summary())


if __name__ == "__main__":
    main()
