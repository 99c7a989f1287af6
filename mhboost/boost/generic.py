class Boosting(object):
    def train(self, *args, **kwargs):
        raise NotImplementedError("Should have implemented this")

    def classify(self, data):
        raise NotImplementedError("Should have implemented this")


class WeakLearner(object):
    """

    A classifier that can be boosted

    Subclasses are trained through the train classmethod, which returns a
    fitted instance, and never change after that. The booster only calls
    train and classify, and stores the instance it gets back.

    """
    name = None

    @classmethod
    def train(cls, data, labels, num_classes, weights = None, rng = None):
        """

        Fit a new weak learner

        Parameters
        ----------
        data : numpy float array
            Training data, one column per point

        labels : numpy int array
            Dense class index of each point

        num_classes : integer
            Number of classes K, labels are in [0, K)

        weights : numpy float array, optional
            Importance of each point, uniform if None

        rng : numpy.random.RandomState, optional
            Random source for randomized training steps

        Returns:
            A fitted instance

        """
        raise NotImplementedError("Should have implemented this")

    def classify(self, data):
        raise NotImplementedError("Should have implemented this")

    def to_dict(self):
        raise NotImplementedError("Should have implemented this")

    @classmethod
    def from_dict(cls, d, num_classes = None, dimensionality = None):
        """
        Rebuild an instance from to_dict output, raising PersistenceError
        when it cannot predict in [0, num_classes) from dimensionality
        features
        """
        raise NotImplementedError("Should have implemented this")
