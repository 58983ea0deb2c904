from typing import Optional

from gostub.config import GostubConfig
from gostub.golang import (
    GoImportsFormatter,
    GoListResolver,
    PackageLoader,
    ReferenceParser,
    SearchPathResolver,
    SignatureExtractor,
)
from gostub.spec import PackageResolverProtocol, SourceFormatterProtocol
from gostub.stubgen import GenerateRunner, StubRenderer


def make_formatter(config: GostubConfig) -> SourceFormatterProtocol:
    return GoImportsFormatter(command=config.goimports, workdir=config.workdir)


def make_resolver(config: GostubConfig) -> PackageResolverProtocol:
    if config.resolver == "searchpath":
        return SearchPathResolver(config.search_paths)
    return GoListResolver(command=config.go, workdir=config.workdir)


def make_runner(
    config: GostubConfig,
    formatter: Optional[SourceFormatterProtocol] = None,
    resolver: Optional[PackageResolverProtocol] = None,
) -> GenerateRunner:
    # Composition root: one formatter serves import inference and rendering.
    formatter = formatter or make_formatter(config)
    resolver = resolver or make_resolver(config)

    extractor = SignatureExtractor(
        references=ReferenceParser(formatter),
        loader=PackageLoader(resolver),
    )
    return GenerateRunner(
        config=config,
        extractor=extractor,
        renderer=StubRenderer(),
        formatter=formatter,
    )
