import numpy as np
from datetime import datetime
from numexpr import evaluate
from mhboost.boost.generic import Boosting
from mhboost.boost.decision_stump import DecisionStump
from mhboost.utility.errors import (ConfigurationError, DataError,
                                    PersistenceError, StateError)

"""Reasons for the round loop to stop"""
CONVERGED = 'converged'
EXHAUSTED = 'exhausted'
DEGENERATE = 'degenerate'

"""Error used to compute alpha of a hypothesis without any weighted error"""
PERFECT_ERROR = 1e-10


def confidence(err):
    """
    Returns the confidence coefficient of a hypothesis with weighted error err
    """
    return 0.5 * np.log((1.0 - err) / err)


def reweight(dt, mismatch, alpha):
    """

    Update the distribution over (class, example) pairs

    Parameters
    ----------
    dt : numpy float array
        K x N distribution, sums to one

    mismatch : numpy boolean array
        K x N marker, True where the hypothesis disagrees with the label
        on "example i is of class k"

    alpha : float
        Confidence coefficient of the hypothesis

    Returns:
        The renormalized distribution and the normalization constant

    """
    yh = np.where(mismatch, -1.0, 1.0)
    dt = evaluate("dt * exp(-alpha * yh)",
                  local_dict = {'dt': dt,
                                'yh': yh,
                                'alpha': float(alpha)})
    zt = dt.sum()
    return dt / zt, zt


class AdaBoost(Boosting):
    def __init__(self,
                 weak_learner = DecisionStump,
                 iterations = 1000,
                 tolerance = 1e-10,
                 logEN = False):
        """

        AdaBoost.MH Implementation

        Parameters
        ----------
        weak_learner : WeakLearner subclass, optional
            Kind of weak learner to boost

        iterations : integer, optional
            Maximum number of rounds, 0 runs until the tolerance is met

        tolerance : float, optional
            Rounds stop once the weighted error changes less than this

        logEN : boolean, optional
            Flag to enable logging for each round

        """
        if iterations < 0:
            raise ConfigurationError("Error : Invalid number of iterations "
                                     "(%i) specified. Must be greater than "
                                     "or equal to 0." % iterations)
        if tolerance < 0:
            raise ConfigurationError("Error : Tolerance must be non-negative.")
        self.weak_learner = weak_learner
        self.iterations = int(iterations)
        self.tolerance = float(tolerance)
        self.logEN = logEN

        self.num_classes = 0
        self.weak_learners = list()
        self.alpha = list()
        self.history = list()
        self.termination = None
        if self.logEN:
            msg = "Info : AdaBoost.MH created with %s weak learners, " % weak_learner.name
            msg = msg + "%i iterations and tolerance %g." % (self.iterations, self.tolerance)
            print(datetime.now(), msg)

    def train(self, data, labels, num_classes = None, rng = None):
        """

        Run the boosting rounds

        Any previous ensemble is discarded.

        Parameters
        ----------
        data : numpy float array
            Training data, one column per example

        labels : numpy int array
            Dense class index of each example

        num_classes : integer, optional
            Number of classes, max(labels) + 1 if None

        rng : numpy.random.RandomState, optional
            Random source handed to the weak learner

        Returns:
            Product of the normalization constants, an upper bound on the
            training error

        """
        data = np.atleast_2d(np.asarray(data, dtype = np.float64))
        labels = np.asarray(labels, dtype = np.int64).ravel()
        exam_no = data.shape[1]
        if exam_no == 0:
            raise DataError("Error : Cannot train on an empty dataset.")
        if labels.size != exam_no:
            raise DataError("Error : %i labels given for %i examples."
                            % (labels.size, exam_no))
        if num_classes is None:
            num_classes = int(labels.max()) + 1
        if labels.min() < 0 or labels.max() >= num_classes:
            raise DataError("Error : Labels must be in [0, %i)." % num_classes)

        self.num_classes = num_classes
        self.weak_learners = list()
        self.alpha = list()
        self.history = list()
        self.termination = None

        """Uniform distribution over every (class, example) pair"""
        dt = np.ones((num_classes, exam_no)) / (exam_no * num_classes)
        classes = np.arange(num_classes)[:, None]
        y = labels[None, :] == classes

        zt_product = 1.0
        prev_err = None
        r = 0
        while True:
            if self.iterations > 0 and r >= self.iterations:
                self.termination = EXHAUSTED
                break

            h = self.weak_learner.train(data,
                                        labels,
                                        num_classes,
                                        weights = dt.sum(axis = 0),
                                        rng = rng)
            pred = np.asarray(h.classify(data), dtype = np.int64)
            mismatch = y != (pred[None, :] == classes)
            err = float(dt[mismatch].sum())

            if err >= 0.5:
                self.termination = DEGENERATE
                if self.logEN:
                    msg = "Info : Round %i weak learner error %0.4f is no " % (r, err)
                    msg = msg + "better than chance. Stopping."
                    print(datetime.now(), msg)
                break

            if err <= 0.0:
                """Perfect on the weighted sample, nothing left to boost"""
                alpha = confidence(PERFECT_ERROR)
                self.weak_learners.append(h)
                self.alpha.append(alpha)
                self.history.append({'error': err, 'alpha': alpha, 'zt': 1.0})
                self.termination = DEGENERATE
                if self.logEN:
                    msg = "Info : Round %i weak learner has no error. Stopping." % r
                    print(datetime.now(), msg)
                break

            alpha = confidence(err)
            dt, zt = reweight(dt, mismatch, alpha)
            zt_product *= zt
            self.weak_learners.append(h)
            self.alpha.append(alpha)
            self.history.append({'error': err, 'alpha': alpha, 'zt': zt})
            if self.logEN:
                msg = "Info : Round %i error : %0.6f alpha : %0.6f weak learner : %s" % (
                      r, err, alpha, h)
                print(datetime.now(), msg)
            r += 1

            if prev_err is not None and abs(err - prev_err) < self.tolerance:
                self.termination = CONVERGED
                break
            prev_err = err

        if self.logEN:
            msg = "Info : Boosting %s after %i rounds." % (self.termination,
                                                           len(self.alpha))
            print(datetime.now(), msg)
        return zt_product

    def classify(self, data, return_scores = False):
        """

        Weighted vote of the ensemble

        Parameters
        ----------
        data : numpy float array
            Test data, one column per example

        return_scores : boolean, optional
            Also return the K x N vote matrix normalized per example

        Returns:
            Dense class index of each example, the smallest index wins ties

        """
        if len(self.weak_learners) == 0:
            raise StateError("Error : Cannot classify with an empty ensemble. "
                             "Train the model first.")
        data = np.atleast_2d(np.asarray(data, dtype = np.float64))
        exam_no = data.shape[1]
        scores = np.zeros((self.num_classes, exam_no))
        columns = np.arange(exam_no)
        for h, alpha in self.get_hypotheses():
            scores[h.classify(data), columns] += alpha
        predictions = np.argmax(scores, axis = 0)
        if return_scores:
            return predictions, scores / np.sum(self.alpha)
        return predictions

    def get_hypotheses(self):
        """
        Returns the (weak learner, alpha) pairs of the ensemble
        """
        return list(zip(self.weak_learners, self.alpha))

    def to_dict(self):
        d = dict()
        d['num_classes'] = self.num_classes
        d['alpha'] = np.asarray(self.alpha, dtype = np.float64)
        d['weak_learners'] = [h.to_dict() for h in self.weak_learners]
        return d

    @classmethod
    def from_dict(cls, d, weak_learner, dimensionality = None):
        """
        Rebuild an ensemble from to_dict output

        Every weak learner is checked against the number of classes of the
        ensemble and, when given, the dimensionality of the data.
        """
        boosting = cls(weak_learner = weak_learner)
        try:
            boosting.num_classes = int(d['num_classes'])
            alpha = np.asarray(d['alpha'], dtype = np.float64).ravel()
            blobs = d['weak_learners']
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError("Error : Malformed ensemble : %s" % e)
        if boosting.num_classes < 1:
            raise PersistenceError("Error : Ensemble has %i classes."
                                   % boosting.num_classes)
        if not isinstance(blobs, list):
            raise PersistenceError("Error : Malformed ensemble, weak learners "
                                   "are not a list.")
        if len(blobs) != alpha.size:
            raise PersistenceError("Error : Ensemble has %i weak learners "
                                   "but %i alphas." % (len(blobs), alpha.size))
        boosting.alpha = [float(a) for a in alpha]
        boosting.weak_learners = [weak_learner.from_dict(
                                      b,
                                      num_classes = boosting.num_classes,
                                      dimensionality = dimensionality)
                                  for b in blobs]
        return boosting

    def __len__(self):
        return len(self.weak_learners)
