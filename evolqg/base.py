import abc
from collections import defaultdict
from inspect import signature
from typing import Optional

import numpy as np
from sklearn.base import BaseEstimator


class _BaseMethodsMixin(BaseEstimator, abc.ABC):
    """ Methods shared by estimators and models: parameter introspection and pickling with a version stamp.
    The representation is the one of scikit-learn estimators, listing parameters that differ from their defaults.
    """

    def get_params(self, deep=False):
        r"""Get the parameters, i.e., the arguments of the constructor and their current values.

        Returns
        -------
        params : mapping of string to any
            Parameter names mapped to their values.
        """
        cls = self.__class__
        init_sign = signature(cls.__init__)
        args = []
        for parameter in init_sign.parameters.values():
            if parameter.kind == parameter.VAR_POSITIONAL:
                raise RuntimeError(f"Estimators and models must specify their parameters in the signature of "
                                   f"their __init__ (no varargs). {cls} doesn't follow this convention.")
            if parameter.kind != parameter.VAR_KEYWORD and parameter.name != 'self':
                args.append(parameter.name)
        return {arg: getattr(self, arg, None) for arg in args}

    def set_params(self, **params):
        r""" Set the parameters of this instance. Nested objects can be addressed with keys of the form
        ``<component>__<parameter>``.

        Parameters
        ----------
        **params : dict
            Parameters.

        Returns
        -------
        self : object
            Reference to self.
        """
        if not params:
            return self
        valid_params = self.get_params(deep=True)

        nested_params = defaultdict(dict)
        for key, value in params.items():
            key, delim, sub_key = key.partition('__')
            if key not in valid_params:
                raise ValueError(f'Invalid parameter {key} for {self}. Check the list of available parameters '
                                 f'with `get_params().keys()`.')
            if delim:
                nested_params[key][sub_key] = value
            else:
                setattr(self, key, value)
                valid_params[key] = value

        for key, sub_params in nested_params.items():
            valid_params[key].set_params(**sub_params)

        return self

    def __getstate__(self):
        state = self.__dict__
        if type(self).__module__.startswith('evolqg.'):
            from evolqg import __version__
            return dict(state.items(), _evolqg_version=__version__)
        return state

    def __setstate__(self, state):
        from evolqg import __version__
        if type(self).__module__.startswith('evolqg.'):
            pickle_version = state.pop("_evolqg_version", None)
            if pickle_version != __version__:
                import warnings
                warnings.warn(
                    f"Trying to unpickle {self.__class__.__name__} from version {pickle_version} when "
                    f"using version {__version__}. This might lead to breaking code or invalid results. "
                    f"Use at your own risk.", UserWarning)
        self.__dict__.update(state)


class Model(_BaseMethodsMixin):
    r""" The model superclass. """

    def copy(self) -> "Model":
        r""" Makes a deep copy of this model.

        Returns
        -------
        copy
            A new copy of this model.
        """
        import copy
        return copy.deepcopy(self)


class Estimator(_BaseMethodsMixin):
    r""" Base class of all estimators. Calling :meth:`fit` produces a :class:`Model`, which can be obtained
    by :meth:`fetch_model`. During :meth:`fit` the input matrix is flagged read-only.

    Parameters
    ----------
    model : Model, optional, default=None
        A model which can be used for initialization.
    """

    _MUTABLE_INPUT_DATA = False

    def __init__(self, model=None):
        self._model = model

    @abc.abstractmethod
    def fit(self, data, **kwargs):
        r""" Fits data to the estimator's internal :class:`Model` and overwrites it.

        Parameters
        ----------
        data : array_like
            Data that is used to fit a model.
        **kwargs
            Additional kwargs.

        Returns
        -------
        self : Estimator
            Reference to self.
        """

    def fetch_model(self) -> Optional[Model]:
        r""" Yields the estimated model. Can be None if :meth:`fit` was not called.

        Returns
        -------
        model : Model or None
            The estimated model or None.
        """
        return self._model

    def fit_fetch(self, data, **kwargs):
        r""" Fits the internal model on data and subsequently fetches it in one call.

        Parameters
        ----------
        data : array_like
            Data that is used to fit the model.
        **kwargs
            Additional arguments to :meth:`fit`.

        Returns
        -------
        model
            The estimated model.
        """
        self.fit(data, **kwargs)
        return self.fetch_model()

    @property
    def model(self):
        """ Shortcut to :meth:`fetch_model`. """
        return self.fetch_model()

    @property
    def has_model(self) -> bool:
        r""" Whether this estimator contains an estimated model.

        :type: bool
        """
        return self._model is not None

    def __getattribute__(self, item):
        if item == 'fit' and not self._MUTABLE_INPUT_DATA:
            fit = super(Estimator, self).__getattribute__(item)
            return _ImmutableInputData(fit)

        return super(_BaseMethodsMixin, self).__getattribute__(item)


class _ImmutableInputData:
    """Wraps Estimator.fit() so that ndarray input is read-only for the duration of the call."""

    def __init__(self, fit_method):
        self.fit_method = fit_method
        self._data = []
        self._writeable = []

    def _collect(self, args, kwargs):
        if len(args) == 0:
            if 'data' in kwargs:
                args = [kwargs['data']]
            elif len(kwargs) == 1:
                args = list(kwargs.values())
            else:
                raise InputFormatError(f'No input at all for fit(). Input was {args}, kw={kwargs}')
        value = args[0]
        if isinstance(value, np.ndarray):
            self._data = [value]
        elif isinstance(value, (list, tuple)):
            self._data = []
        else:
            raise InputFormatError(f'Only ndarray or nested list/tuple of numbers allowed. '
                                   f'But was of type {type(value)}: {value}.')

    def __enter__(self):
        self._writeable = []
        for d in self._data:
            self._writeable.append(d.flags.writeable)
            d.setflags(write=False)

    def __exit__(self, exc_type, exc_val, exc_tb):
        for d, writeable in zip(self._data, self._writeable):
            if writeable:
                d.setflags(write=True)

    def __call__(self, *args, **kwargs):
        self._collect(args, kwargs)
        with self:
            return self.fit_method(*args, **kwargs)


class Transformer(abc.ABC):
    r""" Base class of all transformers. """

    @abc.abstractmethod
    def transform(self, data, **kwargs):
        r"""Transforms the input data.

        Parameters
        ----------
        data : array_like
            Input data.

        Returns
        -------
        transformed : array_like
            The transformed data
        """

    def __call__(self, *args, **kwargs):
        return self.transform(*args, **kwargs)


class EstimatorTransformer(Estimator, Transformer, abc.ABC):

    def fit_transform(self, data, fit_options=None, transform_options=None):
        r""" Fits a model which simultaneously functions as transformer and subsequently transforms
        the input data. The estimated model can be accessed by calling :meth:`fetch_model`.

        Parameters
        ----------
        data : array_like
            The input data.
        fit_options : dict, optional, default=None
            Optional keyword arguments passed on to the fit method.
        transform_options : dict, optional, default=None
            Optional keyword arguments passed on to the transform method.

        Returns
        -------
        output : array_like
            Transformed data.
        """
        fit_options = {} if fit_options is None else fit_options
        transform_options = {} if transform_options is None else transform_options
        return self.fit(data, **fit_options).transform(data, **transform_options)

    def transform(self, data, **kwargs):
        r""" Transforms data with the encapsulated model.

        Parameters
        ----------
        data : array_like
            Input data
        **kwargs
            Optional arguments.

        Returns
        -------
        output : array_like
            Transformed data.
        """
        model = self.fetch_model()
        if model is None:
            raise ValueError("This estimator contains no model yet, fit should be called first.")
        return model.transform(data, **kwargs)


class InputFormatError(ValueError):
    """Input data for Estimator is not allowed."""
