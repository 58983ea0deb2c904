from typing import List, Optional

from gostub.spec import Func, Param, StubSpec

INTEGER_TYPES = {
    "int", "int8", "int16", "int32", "int64",
    "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
    "byte", "rune",
}
FLOAT_TYPES = {"float32", "float64", "complex64", "complex128"}
BASIC_TYPES = INTEGER_TYPES | FLOAT_TYPES | {"bool", "string"}
NIL_PREFIXES = ("func(", "chan ", "chan<-", "<-chan", "interface{", "interface {")


class StubRenderer:
    """
    Renders a stub struct with one ``<Method>Func`` field per method and a
    forwarding method that calls the field or returns zero values.

    The output is unformatted; the formatter collaborator canonicalizes it.
    """

    receiver_var = "t"

    def __init__(self, indent: str = "\t"):
        self._indent_str = indent

    def render(self, spec: StubSpec) -> str:
        lines = [
            "// Code generated by gostub; DO NOT EDIT.",
            "",
            f"package {spec.package}",
            "",
        ]

        lines.append(f"// {spec.receiver} is a stub implementation of {spec.interface_name}.")
        lines.append(f"type {spec.receiver} struct {{")
        for func in spec.funcs:
            lines.append(
                f"{self._indent(1)}{func.name}Func func{self._signature(func, _field_params(func.params))}"
            )
        lines.append("}")

        for func in spec.funcs:
            lines.append("")
            lines.extend(self._forwarding_method(func, spec))

        return "\n".join(lines) + "\n"

    def _indent(self, level: int) -> str:
        return self._indent_str * level

    def _signature(self, func: Func, params: Optional[List[Param]] = None) -> str:
        params = func.params if params is None else params
        rendered = ", ".join(f"{p.name} {p.type}".strip() for p in params)
        results = ", ".join(f"{r.name} {r.type}".strip() for r in func.results)
        if results:
            results += ","
        return f"({rendered}) ({results})"

    def _forwarding_method(self, func: Func, spec: StubSpec) -> List[str]:
        params = _named_params(func.params)
        receiver = self._receiver_name(params, func.results)
        field = f"{receiver}.{func.name}Func"
        args = ", ".join(p.name + ("..." if p.is_variadic else "") for p in params)
        call = f"{field}({args})"

        lines = [
            f"// {func.name} calls {func.name}Func when it is set.",
            f"func ({receiver} *{spec.receiver}) {func.name}{self._signature(func, params)} {{",
            f"{self._indent(1)}if {field} != nil {{",
        ]
        if not func.results:
            lines.append(f"{self._indent(2)}{call}")
            lines.append(f"{self._indent(1)}}}")
            lines.append("}")
            return lines

        defaults = ", ".join(self.zero_value(r.type, spec, receiver) for r in func.results)
        lines.append(f"{self._indent(2)}return {call}")
        lines.append(f"{self._indent(1)}}}")
        lines.append(f"{self._indent(1)}return {defaults}")
        lines.append("}")
        return lines

    def _receiver_name(self, params: List[Param], results: List[Param]) -> str:
        # The receiver must not shadow a parameter, e.g. Run(t *testing.T).
        taken = {p.name for p in params} | {r.name for r in results}
        name = self.receiver_var
        suffix = 0
        while name in taken:
            name = f"{self.receiver_var}{suffix}"
            suffix += 1
        return name

    def zero_value(self, typ: str, spec: StubSpec, receiver: Optional[str] = None) -> str:
        if typ == "error":
            return "nil"
        if typ in INTEGER_TYPES or typ in FLOAT_TYPES:
            return "0"
        if typ == "bool":
            return "false"
        if typ == "string":
            return '""'
        if typ.startswith("*"):
            elem = typ[1:]
            if elem in BASIC_TYPES:
                return f"new({elem})"
            return f"&{elem}{{}}"
        if typ == spec.interface_name:
            return receiver or self.receiver_var
        if typ == "any" or typ.startswith(NIL_PREFIXES):
            return "nil"
        return f"{typ}{{}}"


def _named_params(params: List[Param]) -> List[Param]:
    # Anonymous and blank parameters can't be forwarded by name.
    named = []
    for index, param in enumerate(params):
        if param.name in ("", "_"):
            param = Param(name=f"arg{index}", type=param.type)
        named.append(param)
    return named


def _field_params(params: List[Param]) -> List[Param]:
    # Go rejects parameter lists that mix named and unnamed entries.
    names = [p.name for p in params]
    if all(names) or not any(names):
        return params
    return _named_params(params)
