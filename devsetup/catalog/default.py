"""
Default catalogs.

Component order is install order: runtimes come before the package
installers that need them.
"""

from typing import List, Optional, Sequence

from ..core.catalog import ComponentCatalog
from ..core.methods import (
    CommandMethod,
    ExecutableProbe,
    PythonPackageProbe,
    RegisterSearchPathMethod,
    apt_install,
    conda_install,
    pip_install,
)
from ..core.profiles import FULL_PROFILE, ProfileCatalog
from ..core.search_path import DurableSearchPath
from ..models.component import ComponentSpec
from ..models.profile import Profile

MINIMAL = "Minimal"
VCS_DEV = "VCS_Dev_Essentials"
DATA_SCIENCE = "Data_Science_Core"
AI_ML = "AI_ML_Stack"
BIG_DATA = "Big_Data_Stack"

PROFILE_IDS = [MINIMAL, VCS_DEV, DATA_SCIENCE, AI_ML, BIG_DATA, FULL_PROFILE]

GET_PIP_URL = "https://bootstrap.pypa.io/get-pip.py"
TORCH_CPU_INDEX = "https://download.pytorch.org/whl/cpu"


def build_profile_catalog() -> ProfileCatalog:
    return ProfileCatalog([
        Profile(id=MINIMAL, description="Python runtime and package tooling"),
        Profile(id=VCS_DEV, description="Version control and build tools", implies={MINIMAL}),
        Profile(id=DATA_SCIENCE, description="Scientific Python and notebooks", implies={VCS_DEV}),
        Profile(id=AI_ML, description="Deep learning frameworks", implies={DATA_SCIENCE}),
        Profile(id=BIG_DATA, description="JVM and distributed dataframe tooling", implies={DATA_SCIENCE}),
        Profile(id=FULL_PROFILE, description="Everything in the catalog", implies={AI_ML, BIG_DATA}),
    ])


def build_component_catalog(profiles: ProfileCatalog,
                            search_path: DurableSearchPath,
                            python_executable: str = "python3",
                            conda_executable: str = "conda",
                            use_sudo: bool = True,
                            pip_extra_args: Optional[Sequence[str]] = None) -> ComponentCatalog:
    """
    Build the default component catalog.

    Args:
        profiles: Profile catalog the components refer to
        search_path: Durable search path shared by every method and probe
        python_executable: Interpreter that receives pip installs
        conda_executable: Conda-compatible executable used as a fallback
        use_sudo: Run system package managers through sudo
        pip_extra_args: Extra arguments passed to every pip install
    """
    sp = search_path
    py = python_executable
    pip_args = list(pip_extra_args or [])

    def apt(*packages: str):
        return apt_install(packages, sp, use_sudo=use_sudo)

    def conda(*packages: str, channel: Optional[str] = "conda-forge"):
        return conda_install(packages, sp, conda_executable=conda_executable, channel=channel)

    def pip(*packages: str, extra: Sequence[str] = (), name: str = "pip"):
        return pip_install(packages, sp, python_executable=py,
                           extra_args=pip_args + list(extra), name=name)

    def executable(name: str, version_args: Sequence[str] = ("--version",)):
        return ExecutableProbe(name, sp, version_args=version_args)

    def package(distribution: str):
        return PythonPackageProbe(distribution, py, sp)

    components: List[ComponentSpec] = [
        ComponentSpec(
            id="python",
            description="Python 3 interpreter",
            critical=True,
            halt_on_failure=True,
            probe=executable(py),
            methods=[apt("python3", "python3-venv"), conda("python")],
        ),
        ComponentSpec(
            id="pip",
            description="pip package installer",
            critical=True,
            probe=package("pip"),
            methods=[
                CommandMethod("ensurepip", [[py, "-m", "ensurepip", "--upgrade", "--user"]], sp),
                apt("python3-pip"),
                RegisterSearchPathMethod(
                    CommandMethod(
                        "get-pip",
                        [["sh", "-c", f'curl -fsSL {GET_PIP_URL} | "{py}" - --user']],
                        sp,
                        requires="curl",
                    ),
                    ["~/.local/bin"],
                    sp,
                ),
            ],
        ),
        ComponentSpec(
            id="curl",
            description="curl HTTP client",
            probe=executable("curl"),
            methods=[apt("curl"), conda("curl")],
        ),
        ComponentSpec(
            id="git",
            description="Git version control",
            relevant_profiles={VCS_DEV},
            probe=executable("git"),
            methods=[apt("git"), conda("git")],
        ),
        ComponentSpec(
            id="git-lfs",
            description="Git large file storage",
            relevant_profiles={VCS_DEV},
            probe=executable("git-lfs"),
            methods=[apt("git-lfs"), conda("git-lfs")],
        ),
        ComponentSpec(
            id="build-tools",
            description="C/C++ compiler toolchain",
            relevant_profiles={VCS_DEV},
            probe=executable("gcc"),
            methods=[apt("build-essential"), conda("compilers")],
        ),
        ComponentSpec(
            id="nodejs",
            description="Node.js runtime and npm",
            relevant_profiles={VCS_DEV},
            probe=executable("node"),
            methods=[apt("nodejs", "npm"), conda("nodejs")],
        ),
        ComponentSpec(
            id="scientific-python",
            description="NumPy, pandas, SciPy, scikit-learn, matplotlib",
            critical=True,
            relevant_profiles={DATA_SCIENCE},
            probe=package("pandas"),
            methods=[
                pip("numpy", "pandas", "scipy", "scikit-learn", "matplotlib"),
                conda("numpy", "pandas", "scipy", "scikit-learn", "matplotlib"),
            ],
        ),
        ComponentSpec(
            id="jupyterlab",
            description="JupyterLab notebooks",
            relevant_profiles={DATA_SCIENCE},
            probe=executable("jupyter-lab"),
            methods=[pip("jupyterlab"), conda("jupyterlab")],
        ),
        ComponentSpec(
            id="pytorch",
            description="PyTorch (CPU build)",
            relevant_profiles={AI_ML},
            probe=package("torch"),
            methods=[
                pip("torch", "torchvision", extra=["--index-url", TORCH_CPU_INDEX], name="pip-cpu-index"),
                pip("torch", "torchvision"),
                conda("pytorch", "torchvision", channel="pytorch"),
            ],
        ),
        ComponentSpec(
            id="tensorflow",
            description="TensorFlow",
            relevant_profiles={AI_ML},
            probe=package("tensorflow"),
            methods=[pip("tensorflow"), conda("tensorflow")],
        ),
        ComponentSpec(
            id="transformers",
            description="Hugging Face transformers",
            relevant_profiles={AI_ML},
            probe=package("transformers"),
            methods=[pip("transformers"), conda("transformers")],
        ),
        ComponentSpec(
            id="java",
            description="Java runtime for Spark",
            critical=True,
            relevant_profiles={BIG_DATA},
            probe=executable("java", version_args=["-version"]),
            methods=[apt("default-jdk-headless"), conda("openjdk")],
        ),
        ComponentSpec(
            id="pyspark",
            description="Apache Spark Python API",
            critical=True,
            relevant_profiles={BIG_DATA},
            probe=package("pyspark"),
            methods=[pip("pyspark"), conda("pyspark")],
        ),
        ComponentSpec(
            id="dask",
            description="Dask parallel dataframes",
            relevant_profiles={BIG_DATA},
            probe=package("dask"),
            methods=[pip("dask[complete]"), conda("dask")],
        ),
    ]
    return ComponentCatalog(components, profiles)
