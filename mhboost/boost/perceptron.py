import numpy as np
from mhboost.boost.generic import WeakLearner
from mhboost.utility.errors import PersistenceError

MAX_ITERATIONS = 1000


class Perceptron(WeakLearner):
    name = 'perceptron'

    def __init__(self, weights, biases):
        """

        Multiclass linear classifier, one weight vector per class

        Parameters
        ----------
        weights : numpy float array
            K x F matrix of class weight vectors

        biases : numpy float array
            Bias of each class

        """
        self.weights = np.atleast_2d(np.asarray(weights, dtype = np.float64))
        self.biases = np.asarray(biases, dtype = np.float64).ravel()

    @classmethod
    def train(cls,
              data,
              labels,
              num_classes,
              weights = None,
              rng = None,
              max_iterations = MAX_ITERATIONS):
        """

        Weighted perceptron training

        Every mistake moves the true class towards the point and the predicted
        class away from it, both scaled by the point's weight. Stops after a
        pass without mistakes or after max_iterations passes.

        """
        data = np.atleast_2d(data)
        labels = np.asarray(labels, dtype = np.int64)
        dim, exam_no = data.shape
        if weights is None:
            weights = np.ones(exam_no) / exam_no

        w = np.zeros((num_classes, dim))
        b = np.zeros(num_classes)
        for it in range(max_iterations):
            if rng is not None:
                order = rng.permutation(exam_no)
            else:
                order = np.arange(exam_no)
            converged = True
            for i in order:
                if weights[i] <= 0:
                    continue
                x = data[:, i]
                pred = np.argmax(np.dot(w, x) + b)
                if pred != labels[i]:
                    converged = False
                    w[labels[i]] += weights[i] * x
                    w[pred] -= weights[i] * x
                    b[labels[i]] += weights[i]
                    b[pred] -= weights[i]
            if converged:
                break
        return cls(weights = w, biases = b)

    def classify(self, data):
        data = np.atleast_2d(data)
        scores = np.dot(self.weights, data) + self.biases[:, None]
        return np.argmax(scores, axis = 0)

    def to_dict(self):
        d = dict()
        d['weights'] = self.weights
        d['biases'] = self.biases
        return d

    @classmethod
    def from_dict(cls, d, num_classes = None, dimensionality = None):
        try:
            p = cls(weights = d['weights'], biases = d['biases'])
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError("Error : Malformed perceptron : %s" % e)
        if p.weights.shape[0] != p.biases.size:
            raise PersistenceError("Error : Perceptron has %i weight vectors "
                                   "but %i biases." % (p.weights.shape[0],
                                                       p.biases.size))
        expected = (p.weights.shape[0] if num_classes is None else num_classes,
                    p.weights.shape[1] if dimensionality is None else dimensionality)
        if p.weights.shape != expected:
            raise PersistenceError("Error : Perceptron weights have shape %s, "
                                   "expected %s." % (p.weights.shape, expected))
        return p

    def __str__(self):
        return '< perceptron %i classes x %i features >' % self.weights.shape
