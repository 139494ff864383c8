import configparser
import os

from evomlp.activations import activations

class Config:

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create an empty Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config holding only the optional
                         defaults, for manual attribute setting.
        """
        if config_file is None:

            # Default config for testing/manual setup
            self.activation             = 'sigmoid'
            self.learning_rate          = 0.01
            self.weight_mutation_chance = 0.0
            self.bias_mutation_chance   = 0.0
            self.enable_gradient        = False
            self.gradient_epochs        = 10
            self.gradient_frequency     = 1
            self.gradient_selection     = 'top_k'
            self.gradient_top_k         = 5
            self.seed                   = None
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

        # [NETWORK]

        # The number of input nodes, through which the network receives inputs.
        self.input_nodes = get_value('NETWORK', 'input_nodes', int)

        # The number of hidden layers (0 connects inputs directly to outputs).
        self.hidden_layers = get_value('NETWORK', 'hidden_layers', int, default=1)

        # The number of nodes in each hidden layer.
        self.hidden_nodes = get_value('NETWORK', 'hidden_nodes', int)

        # The number of output nodes, to which the network delivers outputs.
        self.output_nodes = get_value('NETWORK', 'output_nodes', int)

        # The activation function applied by every layer.
        # For the list of all available choices, see the 'activations' module.
        self.activation = get_value('NETWORK', 'activation', str, default='sigmoid')
        if self.activation not in activations:
            raise ValueError(f"Invalid activation function '{self.activation}'")

        # The step size of each backpropagation update.
        self.learning_rate = get_value('NETWORK', 'learning_rate', float, default=0.01)

        # [POPULATION]

        # The number of individuals in each generation.
        self.population_size = get_value('POPULATION', 'population_size', int, default=None)

        # The number of most-fit individuals that will be
        # preserved as-is from one generation to the next.
        self.elitism = get_value('POPULATION', 'elitism', int, default=None)

        # The fraction of (most-fit) individuals allowed to reproduce.
        self.survival_threshold = get_value('POPULATION', 'survival_threshold', float, default=None)

        # [MUTATION]

        # The probability that each weight of an offspring is perturbed
        # by a small amount (uniformly drawn from (-0.1, 0.1)).
        self.weight_mutation_chance = get_value('MUTATION', 'weight_mutation_chance', float, default=0.0)

        # The probability that each parameter of an offspring is perturbed
        # by a large amount (uniformly drawn from (-1.5, 1.5)).
        self.bias_mutation_chance = get_value('MUTATION', 'bias_mutation_chance', float, default=0.0)

        # [TERMINATION]

        # Whether to use the fitness of the most recent
        # generation as a criterion for stopping the run.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, default=None)

        # The fitness value which when met or exceeded causes the run to end.
        # Only applicable if 'fitness_termination_check' is 'True'.
        self.fitness_threshold = get_value('TERMINATION', 'fitness_threshold', float, default=None)

        # The number of generations after which to stop the run.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int, default=None)

        # [GRADIENT_DESCENT] (optional section)

        # Whether to train individuals with backpropagation during evolution.
        self.enable_gradient = get_value('GRADIENT_DESCENT', 'enable_gradient', bool, default=False)

        # Number of passes over the training data per application.
        self.gradient_epochs = get_value('GRADIENT_DESCENT', 'gradient_epochs', int, default=10)

        # Apply training every N generations (1 = every generation).
        self.gradient_frequency = get_value('GRADIENT_DESCENT', 'gradient_frequency', int, default=1)

        # Which individuals to train.
        # Allowed values: 'all', 'top_k'
        self.gradient_selection = get_value('GRADIENT_DESCENT', 'gradient_selection', str, default='top_k')

        # Number of top individuals to train (only applicable if gradient_selection='top_k').
        self.gradient_top_k = get_value('GRADIENT_DESCENT', 'gradient_top_k', int, default=5)

        # [RANDOM] (optional section)

        # Seed for the random generator of a run; 'none' seeds from the OS.
        self.seed = get_value('RANDOM', 'seed', int, default=None)
