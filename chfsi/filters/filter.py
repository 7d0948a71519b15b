"""Base class for polynomial filters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from rich import box
from rich.table import Table

from chfsi import console, printing

if TYPE_CHECKING:
    from typing import Any

    from chfsi.matrix import MatrixBackend


class BaseFilter(ABC):
    """Base class for polynomial filters."""

    _options: set[str] = set()

    result: int | None = None

    def __init_subclass__(cls, *args: Any, **kwargs: Any) -> None:
        """Initialise a subclass of :class:`BaseFilter`."""

        def wrap_init(init: Any) -> Any:
            """Wrapper to call __post_init__ after __init__."""

            def wrapped_init(self: BaseFilter, *args: Any, **kwargs: Any) -> None:
                init(self, *args, **kwargs)
                if init.__name__ == "__init__":
                    self.__log_init__()
                    self.__post_init__()

            return wrapped_init

        def wrap_kernel(kernel: Any) -> Any:
            """Wrapper to call __post_kernel__ after kernel."""

            def wrapped_kernel(self: BaseFilter, *args: Any, **kwargs: Any) -> Any:
                result = kernel(self, *args, **kwargs)
                if kernel.__name__ == "kernel":
                    self.__post_kernel__()
                return result

            return wrapped_kernel

        cls.__init__ = wrap_init(cls.__init__)  # type: ignore[method-assign]
        cls.kernel = wrap_kernel(cls.kernel)  # type: ignore[method-assign]

    def __log_init__(self) -> None:
        """Hook called after :meth:`__init__` for logging purposes."""
        printing.init_console()
        console.print("")

        # Print the filter name
        console.print(f"[method]{self.__class__.__name__}[/method]")

        # Print the options table
        table = Table(box=box.SIMPLE)
        table.add_column("Option")
        table.add_column("Value", style="input")
        for key in sorted(self._options):
            if not hasattr(self, key):
                raise ValueError(f"Option {key} not set in {self.__class__.__name__}")
            value = getattr(self, key)
            if hasattr(value, "__name__"):
                name = value.__name__
            else:
                name = str(value)
            table.add_row(key, name)
        console.print(table)

    def __post_init__(self) -> None:
        """Hook called after :meth:`__init__`."""
        pass

    def __post_kernel__(self) -> None:
        """Hook called after :meth:`kernel`."""
        pass

    def set_options(self, **kwargs: Any) -> None:
        """Set options for the filter.

        Args:
            kwargs: Keyword arguments to set as options.
        """
        for key, val in kwargs.items():
            if key not in self._options:
                raise ValueError(f"Unknown option for {self.__class__.__name__}: {key}")
            setattr(self, key, val)

    @abstractmethod
    def kernel(self, vectors: MatrixBackend, output: MatrixBackend, *args: Any) -> int:
        """Run the filter.

        Args:
            vectors: Block of vectors to be filtered, also used as a work space.
            output: Block of vectors in which the filtered vectors are stored.

        Returns:
            The number of vector applications of the operator.
        """
        pass

    @property
    @abstractmethod
    def matrix(self) -> MatrixBackend:
        """Get the operator."""
        pass

    @property
    def nrows(self) -> int:
        """Get the dimension of the operator."""
        return self.matrix.nrows
