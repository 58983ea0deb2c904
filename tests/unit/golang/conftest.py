from pathlib import Path

import pytest

from gostub.golang import PackageLoader, ReferenceParser, SearchPathResolver, SignatureExtractor
from gostub.test_utils import FakeFormatter, GoWorkspaceFactory

SHAPES = """
package shapes

import (
	"io"

	"example.com/geom"
	"example.com/gone"
)

const Size = 16

// Widget is a concrete type returned by Factory.
type Widget struct {
	Name string
}

type Client interface {
	Get() (string, error)
	Set(v string) error
}

type B interface {
	Foo() int
}

type A interface {
	B
	Bar() bool
}

type Factory interface {
	New() *Widget
	Clone() Factory
}

type Shape interface {
	geom.Measurer
	Name() string
}

type Source interface {
	io.Reader
}

type Mover interface {
	Move(dx, dy int)
	Scale(float64) error
	Tag(labels ...string) []string
	Size() (w, h int)
	Lookup(keys map[string]Widget, fallback io.Reader) (*Widget, bool)
}

type Nothing interface{}

type Hasher interface {
	Sum(b []byte) [Size]byte
}

type Lost interface {
	gone.Thing
}

type Broken interface {
	geom.Absent
	Name() string
}

type Config struct {
	Verbose bool
}
"""

GEOM = """
package geom

type Point struct {
	X, Y int
}

type Measurer interface {
	Area(p Point) float64
}
"""

IO = """
package io

type Reader interface {
	Read(p []byte) (n int, err error)
}

type Writer interface {
	Write(p []byte) (n int, err error)
}

type ReadWriter interface {
	Reader
	Writer
}
"""


@pytest.fixture
def src_root(tmp_path: Path) -> Path:
    (
        GoWorkspaceFactory(tmp_path)
        .with_source("example.com/shapes", "shapes.go", SHAPES)
        .with_source("example.com/geom", "geom.go", GEOM)
        .with_source("io", "io.go", IO)
        .build()
    )
    return tmp_path / "gopath" / "src"


@pytest.fixture
def formatter() -> FakeFormatter:
    return FakeFormatter(
        {"shapes": "example.com/shapes", "geom": "example.com/geom", "io": "io"}
    )


@pytest.fixture
def extractor(src_root: Path, formatter: FakeFormatter) -> SignatureExtractor:
    return SignatureExtractor(
        references=ReferenceParser(formatter),
        loader=PackageLoader(SearchPathResolver([src_root])),
    )
