from pathlib import Path
from typing import Optional

from gostub.common import TransactionManager, bus
from gostub.common.transaction import FileSystemAdapter
from gostub.config import GostubConfig
from gostub.golang import SignatureExtractor
from gostub.needle import L
from gostub.spec import (
    FormatterError,
    GenerateResult,
    RenderFailureError,
    SourceFormatterProtocol,
    StubRendererProtocol,
    StubSpec,
    WriteFailureError,
)


class GenerateRunner:
    def __init__(
        self,
        config: GostubConfig,
        extractor: SignatureExtractor,
        renderer: StubRendererProtocol,
        formatter: SourceFormatterProtocol,
        fs: Optional[FileSystemAdapter] = None,
    ):
        self.config = config
        self.extractor = extractor
        self.renderer = renderer
        self.formatter = formatter
        self.fs = fs

    def resolve_output(self, output: Optional[str]) -> Optional[Path]:
        if not output:
            return None
        return self.config.module_root / output

    def run(
        self,
        receiver: str,
        reference: str,
        output: Optional[str] = None,
        package: Optional[str] = None,
    ) -> GenerateResult:
        bus.debug(L.generate.interface.start, reference=reference)
        extracted = self.extractor.extract(reference)
        bus.debug(
            L.generate.interface.resolved,
            reference=str(extracted.ref),
            count=len(extracted.funcs),
            package=extracted.package_name,
        )

        output_path = self.resolve_output(output)
        if package is None:
            # Without an output file the stub lands in the interface's package.
            package = output_path.parent.name if output_path else extracted.package_name

        spec = StubSpec(
            receiver=receiver,
            package=package,
            funcs=extracted.funcs,
            interface_name=extracted.qualified_name,
        )
        unformatted = self.renderer.render(spec)
        srcdir = output_path.parent if output_path else None
        try:
            source = self.formatter.process(unformatted, srcdir)
        except FormatterError as e:
            raise RenderFailureError(str(e), unformatted) from e

        if output_path is None:
            return GenerateResult(source=source)

        tm = TransactionManager(self.config.module_root, self.fs)
        tm.add_write(output_path, source)
        try:
            tm.commit()
        except OSError as e:
            raise WriteFailureError(output_path, str(e)) from e

        bus.success(L.generate.file.success, path=output_path)
        return GenerateResult(source=source, output_path=output_path)
