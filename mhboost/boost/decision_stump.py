import numpy as np
from mhboost.boost.generic import WeakLearner
from mhboost.utility.errors import PersistenceError


class DecisionStump(WeakLearner):
    name = 'decision_stump'

    def __init__(self, split_dimension, threshold, classes):
        """

        Single feature threshold classifier

        Points whose value on split_dimension is lower than or equal to the
        threshold are assigned classes[0], the rest classes[1].

        Parameters
        ----------
        split_dimension : integer
            Index of the feature the split is placed on

        threshold : float
            Split value

        classes : sequence of two integers
            Predictions for the lower and the upper side

        """
        self.split_dimension = int(split_dimension)
        self.threshold = float(threshold)
        self.classes = np.asarray(classes, dtype = np.int64)

    @classmethod
    def train(cls, data, labels, num_classes, weights = None, rng = None):
        """

        Find the weighted error minimizing split over all features

        Each side of a candidate split predicts its weighted majority class.
        Thresholds are placed halfway between consecutive distinct values.
        Ties go to the lowest feature index and the lowest threshold.

        """
        data = np.atleast_2d(data)
        labels = np.asarray(labels, dtype = np.int64)
        exam_no = data.shape[1]
        if weights is None:
            weights = np.ones(exam_no) / exam_no

        """Class mass of every point, one row per class"""
        mass = np.zeros((num_classes, exam_no))
        mass[labels, np.arange(exam_no)] = weights
        total = mass.sum(axis = 1)

        index = np.argsort(data, axis = 1, kind = 'stable')
        sorted_vals = np.take_along_axis(data, index, axis = 1)

        """Cumulative class mass left of each split, shape (K, F, N)"""
        left = np.cumsum(mass[:, index], axis = 2)
        right = total[:, None, None] - left
        err = (left.sum(axis = 0) - left.max(axis = 0) +
               right.sum(axis = 0) - right.max(axis = 0))

        """A split between two equal values is not a split"""
        err[:, :-1][sorted_vals[:, :-1] == sorted_vals[:, 1:]] = np.inf

        d1, d2 = np.unravel_index(np.argmin(err), err.shape)
        c0 = np.argmax(left[:, d1, d2])
        if d2 < exam_no - 1:
            threshold = (sorted_vals[d1, d2] + sorted_vals[d1, d2 + 1]) / 2.0
            c1 = np.argmax(right[:, d1, d2])
        else:
            threshold = sorted_vals[d1, d2]
            c1 = c0
        return cls(split_dimension = d1,
                   threshold = threshold,
                   classes = (c0, c1))

    def classify(self, data):
        data = np.atleast_2d(data)
        lower = data[self.split_dimension, :] <= self.threshold
        return np.where(lower, self.classes[0], self.classes[1])

    def to_dict(self):
        d = dict()
        d['split_dimension'] = self.split_dimension
        d['threshold'] = self.threshold
        d['classes'] = self.classes
        return d

    @classmethod
    def from_dict(cls, d, num_classes = None, dimensionality = None):
        """
        Rebuild a stump from to_dict output, checking its classes against
        num_classes and its split dimension against dimensionality when given
        """
        try:
            classes = np.asarray(d['classes'], dtype = np.int64).ravel()
            stump = cls(split_dimension = d['split_dimension'],
                        threshold = d['threshold'],
                        classes = classes)
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError("Error : Malformed decision stump : %s" % e)
        if stump.classes.size != 2:
            raise PersistenceError("Error : A decision stump needs exactly "
                                   "two classes, found %i." % classes.size)
        if num_classes is not None and \
                (stump.classes.min() < 0 or stump.classes.max() >= num_classes):
            raise PersistenceError("Error : Decision stump predicts classes "
                                   "%s outside [0, %i)." % (stump.classes.tolist(),
                                                            num_classes))
        if dimensionality is not None and \
                not 0 <= stump.split_dimension < dimensionality:
            raise PersistenceError("Error : Decision stump splits on dimension "
                                   "%i of %i." % (stump.split_dimension,
                                                  dimensionality))
        return stump

    def __str__(self):
        return '< x[%i] <= %s : %i , %i >' % (self.split_dimension,
                                               self.threshold,
                                               self.classes[0],
                                               self.classes[1])
