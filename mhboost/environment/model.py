import os
import h5py
import ujson
import numpy as np
from mhboost.boost.adaboost import AdaBoost
from mhboost.boost.decision_stump import DecisionStump
from mhboost.boost.perceptron import Perceptron
from mhboost.utility.labels import normalize_labels, revert_labels
from mhboost.utility.errors import (ConfigurationError, DataError,
                                    PersistenceError, StateError)

DECISION_STUMP = 0
PERCEPTRON = 1

"""Weak learner class, blob name and command line name of each kind"""
WEAK_LEARNERS = {DECISION_STUMP: DecisionStump,
                 PERCEPTRON: Perceptron}
BLOB_NAMES = {DECISION_STUMP: 'adaboost_ds',
              PERCEPTRON: 'adaboost_p'}
WEAK_LEARNER_NAMES = {'decision_stump': DECISION_STUMP,
                      'perceptron': PERCEPTRON}

H5_EXTENSIONS = ('.h5', '.hdf5')
JSON_EXTENSIONS = ('.json',)


def get_weak_learner_type(name):
    """
    Returns the kind tag for a weak learner name
    """
    try:
        return WEAK_LEARNER_NAMES[name]
    except KeyError:
        raise ConfigurationError("Error : Unknown weak learner type '%s'; "
                                 "must be 'decision_stump' or 'perceptron'."
                                 % name)


class AdaBoostModel():
    def __init__(self,
                 mappings = None,
                 weak_learner_type = DECISION_STUMP,
                 logEN = False):
        """

        A trained AdaBoost ensemble together with what is needed to apply it

        Only one ensemble is held at a time, its weak learner kind is given
        by weak_learner_type.

        Parameters
        ----------
        mappings : numpy array, optional
            Raw label of each dense class index

        weak_learner_type : integer, optional
            DECISION_STUMP or PERCEPTRON

        logEN : boolean, optional
            Flag to enable logging of the boosting rounds

        """
        if weak_learner_type not in WEAK_LEARNERS:
            raise ConfigurationError("Error : Unknown weak learner type %s."
                                     % weak_learner_type)
        self.mappings = None if mappings is None else np.asarray(mappings)
        self.weak_learner_type = weak_learner_type
        self.dimensionality = 0
        self.boost = None
        self.logEN = logEN

    def train(self, data, labels, iterations = 1000, tolerance = 1e-10,
              rng = None):
        """

        Train a new ensemble on dense labels, replacing the old one

        Returns:
            Upper bound on the training error

        """
        data = np.atleast_2d(np.asarray(data, dtype = np.float64))
        labels = np.asarray(labels, dtype = np.int64).ravel()
        if self.mappings is None and labels.size > 0:
            self.mappings = np.arange(labels.max() + 1)
        num_classes = 0 if self.mappings is None else self.mappings.size

        self.boost = None
        boost = AdaBoost(weak_learner = WEAK_LEARNERS[self.weak_learner_type],
                         iterations = iterations,
                         tolerance = tolerance,
                         logEN = self.logEN)
        bound = boost.train(data, labels, num_classes = num_classes, rng = rng)
        self.boost = boost
        self.dimensionality = data.shape[0]
        return bound

    def fit(self, data, raw_labels, iterations = 1000, tolerance = 1e-10,
            rng = None):
        """
        Normalize raw_labels into the model's mapping, then train
        """
        labels, self.mappings = normalize_labels(raw_labels)
        self.train(data, labels, iterations = iterations,
                   tolerance = tolerance, rng = rng)
        return self

    def classify(self, data, return_scores = False):
        """

        Dense class predictions for each column of data

        Raises StateError when the model has not been trained and DataError
        when data does not have the training dimensionality.

        """
        if self.boost is None:
            raise StateError("Error : The model has not been trained.")
        data = np.atleast_2d(np.asarray(data, dtype = np.float64))
        if data.shape[0] != self.dimensionality:
            raise DataError("Error : Test data dimensionality (%i) must be "
                            "the same as the model dimensionality (%i)!"
                            % (data.shape[0], self.dimensionality))
        return self.boost.classify(data, return_scores = return_scores)

    def predict(self, data):
        """
        Raw label predictions for each column of data
        """
        return revert_labels(self.classify(data), self.mappings)

    @property
    def weak_learner_name(self):
        return WEAK_LEARNERS[self.weak_learner_type].name

    def to_dict(self):
        if self.boost is None:
            raise StateError("Error : Cannot save a model that has not "
                             "been trained.")
        d = dict()
        d['mappings'] = self.mappings
        d['weak_learner_type'] = self.weak_learner_type
        d[BLOB_NAMES[self.weak_learner_type]] = self.boost.to_dict()
        d['dimensionality'] = self.dimensionality
        return d

    @classmethod
    def from_dict(cls, d):
        try:
            weak_learner_type = int(d['weak_learner_type'])
        except (KeyError, TypeError, ValueError):
            raise PersistenceError("Error : Model has no valid weak learner "
                                   "type.")
        if weak_learner_type not in WEAK_LEARNERS:
            raise PersistenceError("Error : Unknown weak learner type %i."
                                   % weak_learner_type)
        blob_name = BLOB_NAMES[weak_learner_type]
        try:
            mappings = np.asarray(d['mappings']).ravel()
            blob = d[blob_name]
            dimensionality = int(d['dimensionality'])
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError("Error : Malformed model, missing %s." % e)
        if not isinstance(blob, dict):
            raise PersistenceError("Error : Malformed model, %s is not an "
                                   "ensemble." % blob_name)

        model = cls(mappings = mappings, weak_learner_type = weak_learner_type)
        if dimensionality < 1:
            raise PersistenceError("Error : Model has dimensionality %i." % dimensionality)
        model.boost = AdaBoost.from_dict(blob,
                                         WEAK_LEARNERS[weak_learner_type],
                                         dimensionality = dimensionality)
        model.dimensionality = dimensionality
        if model.boost.num_classes != mappings.size:
            raise PersistenceError("Error : Ensemble has %i classes but the "
                                   "mapping has %i labels."
                                   % (model.boost.num_classes, mappings.size))
        return model

    def save(self, fp):
        """

        Write the model to fp, HDF5 or JSON depending on the extension

        """
        ext = _get_extension(fp)
        d = self.to_dict()
        if ext in H5_EXTENSIONS:
            with h5py.File(fp, 'w') as f:
                _write_group(f, d)
        else:
            with open(fp, 'w') as f:
                ujson.dump(_to_jsonable(d), f)

    @classmethod
    def load(cls, fp):
        """

        Read a model written by save

        Raises PersistenceError when the file cannot be parsed into a model.

        """
        ext = _get_extension(fp)
        try:
            if ext in H5_EXTENSIONS:
                with h5py.File(fp, 'r') as f:
                    d = _read_group(f)
            else:
                with open(fp, 'r') as f:
                    d = ujson.load(f)
        except (OSError, ValueError, KeyError) as e:
            raise PersistenceError("Error : Cannot read model file %s : %s"
                                   % (fp, e))
        if not isinstance(d, dict):
            raise PersistenceError("Error : %s does not contain a model." % fp)
        return cls.from_dict(d)


def _get_extension(fp):
    ext = os.path.splitext(str(fp))[1].lower()
    if ext not in H5_EXTENSIONS + JSON_EXTENSIONS:
        raise PersistenceError("Error : Unknown model file format '%s'. Use "
                               "one of %s." % (ext, H5_EXTENSIONS +
                                               JSON_EXTENSIONS))
    return ext


def _to_jsonable(obj):
    if isinstance(obj, dict):
        return dict((k, _to_jsonable(v)) for k, v in obj.items())
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(v) for v in obj]
    if isinstance(obj, (np.ndarray, np.generic)):
        return obj.tolist()
    return obj


def _write_group(group, d):
    """Lists of blobs become groups named by position"""
    for key, value in d.items():
        if isinstance(value, dict):
            _write_group(group.create_group(key), value)
        elif isinstance(value, list):
            sub = group.create_group(key)
            sub.attrs['length'] = len(value)
            for i, item in enumerate(value):
                _write_group(sub.create_group(str(i)), item)
        else:
            value = np.asarray(value)
            if value.dtype.kind in 'OUS':
                group.create_dataset(key,
                                     data = value.astype(object),
                                     dtype = h5py.string_dtype())
            else:
                group.create_dataset(key, data = value)


def _read_group(group):
    if 'length' in group.attrs:
        return [_read_group(group[str(i)])
                for i in range(int(group.attrs['length']))]
    d = dict()
    for key, item in group.items():
        if isinstance(item, h5py.Group):
            d[key] = _read_group(item)
        elif item.dtype.kind in 'OS':
            d[key] = np.asarray(item.asstr()[()]).astype(str)
        else:
            d[key] = item[()]
    return d
