"""Reconciliation of the common configuration key classes against core-default.xml.

Compares these classes::

    org.apache.hadoop.fs.CommonConfigurationKeys
    org.apache.hadoop.fs.CommonConfigurationKeysPublic
    org.apache.hadoop.fs.local.LocalConfigKeys
    org.apache.hadoop.fs.ftp.FtpConfigKeys
    org.apache.hadoop.ha.SshFenceByTcpPort
    org.apache.hadoop.security.LdapGroupsMapping
    org.apache.hadoop.ha.ZKFailoverController
    org.apache.hadoop.security.ssl.SSLFactory
    org.apache.hadoop.security.CompositeGroupsMapping
    org.apache.hadoop.io.erasurecode.CodecUtil
    org.apache.hadoop.security.RuleBasedLdapGroupsMapping

against core-default.xml for missing properties. Only a property in the XML
that is missing from the classes is an error.
"""

from __future__ import annotations

from config_fields.base import ConfigurationFieldsBase

COMMON_CONFIGURATION_CLASSES: tuple[str, ...] = (
    "org.apache.hadoop.fs.CommonConfigurationKeys",
    "org.apache.hadoop.fs.CommonConfigurationKeysPublic",
    "org.apache.hadoop.fs.local.LocalConfigKeys",
    "org.apache.hadoop.fs.ftp.FtpConfigKeys",
    "org.apache.hadoop.ha.SshFenceByTcpPort",
    "org.apache.hadoop.security.LdapGroupsMapping",
    "org.apache.hadoop.ha.ZKFailoverController",
    "org.apache.hadoop.security.ssl.SSLFactory",
    "org.apache.hadoop.security.CompositeGroupsMapping",
    "org.apache.hadoop.io.erasurecode.CodecUtil",
    "org.apache.hadoop.security.RuleBasedLdapGroupsMapping",
)


class CommonConfigurationFields(ConfigurationFieldsBase):
    """core-default.xml against the common configuration key classes."""

    def initialize_member_variables(self) -> None:
        self.xml_filename = "core-default.xml"
        self.configuration_classes = COMMON_CONFIGURATION_CLASSES

        # Error modes
        self.error_if_missing_config_props = True
        self.error_if_missing_xml_props = False

        xml_props = self.xml_props_to_skip_compare
        xml_prefixes = self.xml_prefix_to_skip_compare
        config_props = self.configuration_props_to_skip_compare

        # Lots of properties not in the above classes
        xml_props.update(
            {
                "fs.ftp.password.localhost",
                "fs.ftp.user.localhost",
                "fs.ftp.data.connection.mode",
                "fs.ftp.transfer.mode",
                "fs.ftp.timeout",
                "hadoop.tmp.dir",
                "nfs3.mountd.port",
                "nfs3.server.port",
                "fs.viewfs.rename.strategy",
            }
        )

        # S3A properties are in a different subtree.
        xml_prefixes.add("fs.s3a.")

        # O3 properties are in a different subtree.
        xml_prefixes.add("fs.o3fs.")

        # FTP properties are in a different subtree.
        # - org.apache.hadoop.fs.ftp.FTPFileSystem
        xml_prefixes.add("fs.ftp.impl")

        # WASB properties are in a different subtree.
        # - org.apache.hadoop.fs.azure.NativeAzureFileSystem
        xml_prefixes.update(
            {"fs.wasb.impl", "fs.wasbs.impl", "fs.azure.", "fs.abfs.impl", "fs.abfss.impl"}
        )

        # ADL properties are in a different subtree.
        # - org.apache.hadoop.hdfs.web.ADLConfKeys
        xml_prefixes.update({"adl.", "fs.adl."})
        xml_props.add("fs.AbstractFileSystem.adl.impl")

        # ViewfsOverloadScheme target fs impl keys are built dynamically and are
        # advanced properties.
        xml_props.update(
            f"fs.viewfs.overload.scheme.target.{scheme}.impl"
            for scheme in (
                "abfs",
                "abfss",
                "file",
                "ftp",
                "gs",
                "hdfs",
                "http",
                "https",
                "ofs",
                "o3fs",
                "oss",
                "s3a",
                "swebhdfs",
                "webhdfs",
                "wasb",
            )
        )

        # Azure properties are in a different class.
        # - org.apache.hadoop.fs.azure.AzureNativeFileSystemStore
        # - org.apache.hadoop.fs.azure.SASKeyGeneratorImpl
        xml_props.update(
            {
                "fs.azure.sas.expiry.period",
                "fs.azure.local.sas.key.mode",
                "fs.azure.secure.mode",
                "fs.azure.authorization",
                "fs.azure.authorization.caching.enable",
                "fs.azure.saskey.usecontainersaskeyforallaccess",
                "fs.azure.user.agent.prefix",
            }
        )

        # Call queue overflow triggering failover for stateless servers.
        xml_props.update(
            {
                "ipc.[port_number].callqueue.overflow.trigger.failover",
                "ipc.callqueue.overflow.trigger.failover",
            }
        )

        # FairCallQueue keys embed the port number.
        xml_props.update(
            {
                "ipc.[port_number].backoff.enable",
                "ipc.backoff.enable",
                "ipc.[port_number].callqueue.impl",
                "ipc.callqueue.impl",
                "ipc.[port_number].scheduler.impl",
                "ipc.scheduler.impl",
                "ipc.[port_number].scheduler.priority.levels",
                "ipc.[port_number].callqueue.capacity.weights",
                "ipc.[port_number].faircallqueue.multiplexer.weights",
                "ipc.[port_number].identity-provider.impl",
                "ipc.identity-provider.impl",
                "ipc.[port_number].cost-provider.impl",
                "ipc.cost-provider.impl",
                "ipc.[port_number].decay-scheduler.period-ms",
                "ipc.[port_number].decay-scheduler.decay-factor",
                "ipc.[port_number].decay-scheduler.thresholds",
                "ipc.[port_number].decay-scheduler.backoff.responsetime.enable",
                "ipc.[port_number].decay-scheduler.backoff.responsetime.thresholds",
                "ipc.[port_number].decay-scheduler.metrics.top.user.count",
                "ipc.[port_number].decay-scheduler.service-users",
                "ipc.[port_number].weighted-cost.lockshared",
                "ipc.[port_number].weighted-cost.lockexclusive",
                "ipc.[port_number].weighted-cost.handler",
                "ipc.[port_number].weighted-cost.lockfree",
                "ipc.[port_number].weighted-cost.response",
            }
        )

        # Deprecated properties, to be removed from the classes eventually.
        # - CommonConfigurationKeysPublic.IO_SORT_MB_KEY
        # - CommonConfigurationKeysPublic.IO_SORT_FACTOR_KEY
        config_props.update({"io.sort.mb", "io.sort.factor"})

        # Irrelevant property
        config_props.add("dr.who")

        # XML deprecated properties.
        # - org.apache.hadoop.hdfs.client.HdfsClientConfigKeys
        xml_props.add("io.bytes.per.checksum")

        # Properties in other classes that aren't easily determined (not
        # following naming convention, in a different project, not public).
        # - org.apache.hadoop.http.HttpServer2.FILTER_INITIALIZER_PROPERTY
        xml_props.add("hadoop.http.filter.initializers")
        # - org.apache.hadoop.security.HttpCrossOriginFilterInitializer.PREFIX
        xml_prefixes.add("hadoop.http.cross-origin.")
        xml_prefixes.add("fs.AbstractFileSystem.")
        # - org.apache.hadoop.ha.SshFenceByTcpPort
        xml_prefixes.add("dfs.ha.fencing.ssh.")
        # - org.apache.hadoop.classification.RegistryConstants
        xml_prefixes.add("hadoop.registry.")
        # - org.apache.hadoop.security.AuthenticationFilterInitializer
        xml_prefixes.add("hadoop.http.authentication.")
        # - org.apache.hadoop.crypto.key.kms.KMSClientProvider.AUTH_RETRY
        xml_props.add("hadoop.security.kms.client.authentication.retry-count")
        # - org.apache.hadoop.io.nativeio.NativeIO
        xml_props.add("hadoop.workaround.non.threadsafe.getpwuid")
        # - org.apache.hadoop.hdfs.DFSConfigKeys
        xml_props.add("dfs.ha.fencing.methods")
        # - CommonConfigurationKeysPublic.HADOOP_SECURITY_CRYPTO_CODEC_CLASSES_KEY_PREFIX
        xml_prefixes.add("hadoop.security.crypto.codec.classes")
        # - org.apache.hadoop.hdfs.server.datanode.DataNode
        xml_props.add("hadoop.common.configuration.version")
        # - org.apache.hadoop.fs.FileSystem
        xml_props.add("fs.har.impl.disable.cache")

        # - org.apache.hadoop.tracing.TraceUtils
        xml_props.add("hadoop.htrace.span.receiver.classes")
        # Private keys
        # - org.apache.hadoop.ha.ZKFailoverController
        xml_props.update({"ha.zookeeper.parent-znode", "ha.zookeeper.session-timeout.ms"})
        # - CommonConfigurationKeys.FS_CLIENT_HTRACE_PREFIX, no known reader
        xml_prefixes.add("fs.client.htrace.")
        # - org.apache.hadoop.security.UserGroupInformation
        xml_props.add("hadoop.kerberos.kinit.command")
        # - org.apache.hadoop.net.NetUtils
        xml_props.add("hadoop.rpc.socket.factory.class.ClientProtocol")

        # Keys with no corresponding variable
        # - org.apache.hadoop.io.compress.bzip2.Bzip2Factory
        xml_props.add("io.compression.codec.bzip2.library")
        # - org.apache.hadoop.io.SequenceFile
        xml_props.add("io.seqfile.local.dir")

        xml_props.add("hadoop.http.sni.host.check.enabled")
