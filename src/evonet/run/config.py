import configparser
import os
from evonet.activations import activations

class Config:

    @staticmethod
    def _parse_topology(raw_topology):
        """
        Parse topology from string to tuple of ints.

        Parameters:
            raw_topology: Either a comma-separated string ("5,3,2") or a sequence of ints

        Returns:
            Tuple with the neuron count of each stage
        """
        if isinstance(raw_topology, str):
            try:
                return tuple(int(size.strip()) for size in raw_topology.split(','))
            except ValueError:
                raise ValueError(f"Invalid topology '{raw_topology}', expected comma-separated integers")
        return tuple(int(size) for size in raw_topology)

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config holding the default values,
                         for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size = 50
            self.topology        = (5, 3, 2)
            self.init_min_value  = -5.0
            self.init_max_value  =  5.0

            self.activation          = 'tanh'
            self.sigmoid_coefficient = 0.5

            self.mutation_chance   = 0.01
            self.mutation_strength = 0.5

            self.crossover_chance      = 0.01
            self.crossover_probability = 0.01

            self.fitness_termination_check = False
            self.fitness_criterion         = 'max'
            self.fitness_threshold         = None
            self.max_number_generations    = 100

            self.seed = None

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION_INIT]

        # The number of networks in each generation. Must be even, as
        # parents are paired two by two for crossover.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int)

        # The neuron count of each stage, input stage first, output stage last.
        # Comma-separated, e.g. "5,3,2".
        self.topology = get_value('POPULATION_INIT', 'topology', str)

        # The range of the uniform distribution used to initialize
        # the weights and biases of the first generation.
        self.init_min_value = get_value('POPULATION_INIT', 'init_min_value', float, default=-5.0)
        self.init_max_value = get_value('POPULATION_INIT', 'init_max_value', float, default= 5.0)

        # [NETWORK]

        # Activation function installed in every layer of every network.
        # Options: relu, sigmoid, tanh (see 'basic_activations.py').
        self.activation = get_value('NETWORK', 'activation', str, default='tanh')

        # Steepness of the sigmoid; only applicable if 'activation' is "sigmoid".
        self.sigmoid_coefficient = get_value('NETWORK', 'sigmoid_coefficient', float, default=0.5)

        # [MUTATION]

        # The probability that mutation will perturb a given weight or bias of an offspring.
        self.mutation_chance = get_value('MUTATION', 'mutation_chance', float)

        # The largest absolute value added to a weight or bias by a perturbation.
        self.mutation_strength = get_value('MUTATION', 'mutation_strength', float)

        # [CROSSOVER]

        # The probability that, at a given weight or bias position, each child
        # inherits the value of its own parent (child 1 from parent 1, child 2 from
        # parent 2); otherwise the two values are swapped across the children.
        self.crossover_chance = get_value('CROSSOVER', 'crossover_chance', float)

        # The probability that a pair of parents produces any offspring at all.
        # Pairs that don't are replaced by the fittest networks of the previous generation.
        self.crossover_probability = get_value('CROSSOVER', 'crossover_probability', float)

        # [TERMINATION]

        # Whether to use the fitness of the most recent
        # generation as a criterion for stopping the run.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, default=False)

        # The function used to compute the termination criterion.
        # Only applicable if 'fitness_termination_check' is 'True'.
        # Allowed values:
        #   "mean" calculate the mean fitness across the entire population
        #   "max"  get the fitness of the fittest network in the population
        self.fitness_criterion = get_value('TERMINATION', 'fitness_criterion', str, default='max')

        # The fitness value which when met or exceeded causes the run to end.
        # Only applicable if 'fitness_termination_check' is 'True'.
        self.fitness_threshold = get_value('TERMINATION', 'fitness_threshold', float, default=None)

        # The number of generations after which to stop the run.
        # If 'fitness_termination_check' is 'True', the run may stop sooner.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int)

        # [RANDOM] (optional section)

        # Seed of the random number generator; "None" draws fresh entropy.
        self.seed = get_value('RANDOM', 'seed', int, default=None)

        if self.fitness_termination_check and self.fitness_threshold is None:
            raise ValueError("'fitness_threshold' is required when 'fitness_termination_check' is True")

    def __setattr__(self, name, value):
        """
        Override 'setattr' to validate and normalize values when set.
        This allows users to write config.topology = "5,3,2" and have it
        automatically converted to a tuple of ints.
        """
        if name == 'topology' and value is not None:
            value = self._parse_topology(value)
        elif name == 'activation' and value not in activations:
            raise ValueError(f"Invalid activation function '{value}', use one of {list(activations)}")
        super().__setattr__(name, value)
